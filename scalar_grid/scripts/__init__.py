"""Command line entry points (run with ``python -m scalar_grid.scripts.<name>``)."""
