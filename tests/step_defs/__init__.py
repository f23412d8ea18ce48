"""Step definitions for the signup flow BDD scenarios.

The step modules are registered through ``pytest_plugins`` in the root
conftest.py so pytest-bdd can discover them for every feature file.
"""
