"""tabkeeper - save, restore and sort open editor tabs."""
