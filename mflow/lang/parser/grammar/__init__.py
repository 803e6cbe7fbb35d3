"""Hand-written lexer for MFlow source text."""
