"""Studymate: a study assistant over a generative-AI service.

Package structure:
- i18n: UI string catalogue and the active locale
- render: mixed prose and chart rendering for model output
- schedule: weekly schedule data and its local mutations
- llm: the generative-AI port and its Gemini provider
- prompts: instruction templates
- service: request assembly for the four capabilities
- tutor: streamed tutoring conversation
- assistant: per-mode state and handlers
- ui, cli: Textual and Typer front ends
"""

__version__ = "0.1.0"
