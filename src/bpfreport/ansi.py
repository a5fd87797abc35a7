"""ANSI escape sequences used for terminal reports."""

COLOR_RESET = "\033[0m"
COLOR_BOLD = "\033[1m"
COLOR_RED = "\033[31m"
COLOR_BLUE = "\033[34m"

# 24-bit colors from the GitHub Sublime theme
# https://github.com/AlexanderEkdahl/github-sublime-theme/blob/master/GitHub.tmTheme
COLOR_PURPLE = "\033[38;2;121;93;163m"   # #795da3
COLOR_TEAL = "\033[38;2;0;134;179m"      # #0086b3
COLOR_PINK = "\033[38;2;167;29;93m"      # #a71d5d
COLOR_INDIGO = "\033[38;2;24;54;145m"    # #183691
COLOR_GRAY = "\033[38;2;150;152;150m"    # #969896
COLOR_DARKGRAY = "\033[38;2;51;51;51m"   # #333333
