"""SoulPaper — FastAPI layer.

This package contains the FastAPI application factory and the Pydantic
request/response models.

Modules
-------
main
    ``create_app()`` with all route handlers, the Gradio mount, and the
    ``main()`` CLI entry point.
models
    Pydantic models for API request and response validation.
"""
