"""CSS styles for the TUI.

Hides layout and styling decisions from the application logic.
Uses Textual CSS features: nesting, pseudo-classes, variables.
"""

APP_CSS = """
/* ============================================
   Main Screen Layout
   ============================================ */
Screen {
    layout: vertical;
    background: $background;
}

#mode-tabs {
    dock: top;
    margin-top: 1;
}

#main {
    height: 1fr;
}

/* ============================================
   Input Panel - prompt, image path, submit
   ============================================ */
#input-panel {
    width: 2fr;
    height: 100%;
    background: $panel;
    border: round $primary 60%;
    border-title-color: $primary;
    border-title-style: bold;
    padding: 0 1;

    &:focus-within {
        border: round $primary;
    }
}

#prompt {
    height: 1fr;
    min-height: 5;
    background: $surface;
    border: tall $border;

    &:focus {
        border: tall $primary;
    }
}

#image-path {
    margin-top: 1;
}

#submit-btn {
    width: 100%;
    margin-top: 1;
}

/* ============================================
   Output Panel - per-mode views
   ============================================ */
#output-panel {
    width: 3fr;
    height: 100%;
    background: $panel;
    border: round $secondary 60%;
    border-title-color: $secondary;
    border-title-style: bold;
    padding: 0 1;
}

#views {
    height: auto;
}

.content-view {
    height: auto;
    padding: 0 1;
}

.section {
    margin-top: 1;
    border: round $accent 60%;
    border-title-color: $accent;
}

#solver-actions {
    height: 3;
    margin-top: 1;

    Button {
        margin-right: 1;
    }
}

#sketch-image {
    width: 100%;
    height: 30;
}

#sketch-edit-bar {
    height: 3;
    margin-top: 1;

    Input {
        width: 1fr;
    }
}

#sketch-edit-error {
    color: $error;
}

#schedule-table {
    height: auto;
    max-height: 40;
    margin-top: 1;
}

TutorChatView {
    height: auto;
}

/* ============================================
   Log Panel and Footer
   ============================================ */
#debug-panel {
    height: 12;
    background: $panel;
    border: round $warning 60%;
    border-title-color: $warning;
    border-subtitle-color: $text-muted;
    border-subtitle-align: right;
}

#disclaimer {
    height: 1;
    color: $text-muted;
    text-align: center;
    text-style: italic;
}
"""
