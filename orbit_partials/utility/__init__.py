"""
Utility Package
===============

Terminal output logging and formatted printing.
"""
