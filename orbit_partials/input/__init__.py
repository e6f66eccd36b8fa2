"""
Input Package
=============

YAML configuration loading and command-line parsing.
"""
