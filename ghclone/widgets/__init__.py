"""Terminal widgets composed by the controllers' views."""

from .repo_list import HelpBinding, RepoList
from .spinner import SPINNER_SOURCE, Spinner
from .text_input import CURSOR_SOURCE, TextInput, is_printable_key

__all__ = [
    "CURSOR_SOURCE",
    "HelpBinding",
    "RepoList",
    "SPINNER_SOURCE",
    "Spinner",
    "TextInput",
    "is_printable_key",
]
