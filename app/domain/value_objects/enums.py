"""Domain enums — pure Python, no external dependencies."""

from enum import Enum


class MessageStatus(str, Enum):
    NEW = "new"
