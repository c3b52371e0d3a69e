"""Scaffold, build, deploy, inspect and remove Fuel indexers from the command line."""

__version__ = "0.1.0"