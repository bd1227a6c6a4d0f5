"""Helper modules for the Corn Cat integration."""
