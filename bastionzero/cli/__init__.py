"""`bastionzero` command line interface."""
