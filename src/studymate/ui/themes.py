"""Theme definitions for the TUI.

This module hides the design decisions about:
- Color palettes and visual appearance
- Theme variables (borders, scrollbars, etc.)

To add a new theme, define it here and register in the app.
"""

from textual.theme import Theme

# Chalkboard: dark green-grey surfaces with warm chalk accents
CHALKBOARD = Theme(
    name="chalkboard",
    primary="#7fb3d5",      # Chalk blue - main accent
    secondary="#c39bd3",    # Lilac - secondary accent
    accent="#f7dc6f",       # Chalk yellow - highlights
    foreground="#e8ecea",   # Chalk white text
    background="#16201c",   # Board edge
    success="#82e0aa",      # Green - success states
    warning="#f0b27a",      # Orange - warnings
    error="#f1948a",        # Red - errors
    surface="#1f2b26",      # Board surface
    panel="#1a2521",        # Panel backgrounds
    dark=True,
    variables={
        "block-cursor-foreground": "#16201c",
        "block-cursor-background": "#f7dc6f",
        "block-cursor-text-style": "bold",
        "block-hover-background": "#2c3b35 20%",

        "input-cursor-background": "#e8ecea",
        "input-cursor-foreground": "#16201c",
        "input-selection-background": "#7fb3d5 30%",

        "border": "#3d5048",
        "border-blurred": "#2c3b35",

        "scrollbar": "#2c3b35",
        "scrollbar-hover": "#3d5048",
        "scrollbar-active": "#7fb3d5",
        "scrollbar-background": "#1a2521",
        "scrollbar-corner-color": "#1a2521",

        "footer-foreground": "#c8d0cc",
        "footer-background": "#16201c",
        "footer-key-foreground": "#f7dc6f",
        "footer-key-background": "#2c3b35",
        "footer-description-foreground": "#a9b5b0",

        "text-muted": "#7d8c86",
        "text-disabled": "#3d5048",
        "text-success": "#82e0aa",
        "text-warning": "#f0b27a",
        "text-error": "#f1948a",
        "text-primary": "#7fb3d5",
        "text-secondary": "#c39bd3",
        "text-accent": "#f7dc6f",

        "button-foreground": "#e8ecea",
        "button-color-foreground": "#16201c",
        "button-focus-text-style": "bold reverse",
    },
)
