"""Hero BG Studio — FastAPI REST API layer.

Modules
-------
main
    FastAPI application with all route handlers and the ``main()`` CLI
    entry point.
models
    Pydantic request models and their conversion to generation settings.
"""
