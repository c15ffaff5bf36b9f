"""Core indicator logic and models.

This package contains pure computation with no I/O dependencies
(no file, network or environment access). The host application in
app/ loads data and configuration and calls into it.
"""
