"""User administration console.

This package is organized by feature modules (users, history, ...) with a
thin console controller on top of service/repository layers.
"""
