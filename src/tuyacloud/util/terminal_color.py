class TerminalColorMarks:
    BLUE = "\033[94m"
    BOLD = "\033[1m"
    END = "\033[0m"
