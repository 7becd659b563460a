"""Live, styleable HTML preview of Markdown kept in sync with a web surface."""
