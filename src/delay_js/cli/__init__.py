"""Command line interface for :mod:`delay_js`."""
