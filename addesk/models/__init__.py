"""Input payload models and output data contracts."""
