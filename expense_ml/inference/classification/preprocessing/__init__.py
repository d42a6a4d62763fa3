from .tokenizer import MIN_TOKEN_LENGTH, tokenize

__all__ = ["MIN_TOKEN_LENGTH", "tokenize"]
