"""npc-arena: creature population editor with simultaneous combat rounds."""

__version__ = "0.1.0"
