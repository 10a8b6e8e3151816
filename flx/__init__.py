"""flx -- Flutter Clean Architecture scaffolding CLI.

Generates feature folders (data / domain / presentation), standalone
screens, and shared models, use cases and repositories from Jinja2
templates, using either GetX or BLoC for the presentation layer.
"""

__version__ = "1.0.0"
