"""Argparse router, remote command catalog, and output rendering."""
