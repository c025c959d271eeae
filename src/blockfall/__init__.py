"""Falling-block puzzle simulation engine."""

from .board import Board
from .shapes import ShapeKind, base_shape, random_kind
from .piece import Piece, PieceSnapshot
from .collision import collides, rotate
from .session import Command, Session
from .driver import TickDriver
from .utils import render_grid

__all__ = [
    "Board",
    "Command",
    "Piece",
    "PieceSnapshot",
    "Session",
    "ShapeKind",
    "TickDriver",
    "base_shape",
    "collides",
    "random_kind",
    "render_grid",
    "rotate",
]
