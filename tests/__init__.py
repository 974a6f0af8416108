"""Test suite for glimmer.

Test Structure:
- unit/: Unit tests for individual components
  - color/: Packed color codec and palette
  - lighting/: Sway functions, Radiance modulation and text form
  - config/: Config models and loader
  - utils/: Math, JSON and logging helpers
  - cli/: Command-line entry point
- conftest.py: Shared fixtures and test configuration
"""
