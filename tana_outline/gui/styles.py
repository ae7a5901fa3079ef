"""Theme and styling constants for the application."""

# Window settings
WINDOW_TITLE = "Tana to Outline"
WINDOW_GEOMETRY = "760x600"
WINDOW_MIN_SIZE = (640, 500)

# Padding and spacing
PAD_X = 20
PAD_Y = 10

# Colors
ERROR_COLOR = ("#c0392b", "#ff6b6b")  # (light, dark)

# Widget sizes
LABEL_WIDTH = 120
ENTRY_WIDTH = 440
BUTTON_WIDTH = 100
CONVERT_BUTTON_WIDTH = 160
RESULTS_HEIGHT = 240

# Result tabs
LOG_TAB = "Log"
PAGES_TAB = "Pages"
