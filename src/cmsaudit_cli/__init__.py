"""
CLI (Command Line Interface) for the Contentful audit utilities.

This is a thin wrapper around the cmsaudit package. All business logic lives
there so it can be reused from scripts and tests.
"""
