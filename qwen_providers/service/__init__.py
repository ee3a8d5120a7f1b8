"""Outer layer (presentation) for qwen_providers; currently the CLI only."""
