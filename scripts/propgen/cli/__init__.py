"""Command-line front end for the property generator."""
