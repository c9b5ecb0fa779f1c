"""Settings package for the Emlaknomi project.

``base.py`` holds the configuration shared by every environment; ``dev.py``,
``prod.py`` and ``test.py`` extend it with environment specific overrides.
"""
