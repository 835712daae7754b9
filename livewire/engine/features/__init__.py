"""Feature stages. Importing a module registers its stage."""
