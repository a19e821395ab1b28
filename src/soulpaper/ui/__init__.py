"""Gradio user interface for SoulPaper."""
