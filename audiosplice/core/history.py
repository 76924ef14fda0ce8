import logging
from typing import Optional

from .buffer import AudioBuffer
from .config import UNDO_CONFIG

logger = logging.getLogger("audiosplice")


class EditHistory:
    """
    Undo/redo over successive versions of one buffer.

    Buffers are never mutated by the engine, so versions are stored by
    reference.
    """
    def __init__(self, initial: AudioBuffer, max_depth: int = UNDO_CONFIG.max_depth):
        self.current = initial
        self.undo_stack: list[tuple[str, AudioBuffer]] = []
        self.redo_stack: list[tuple[str, AudioBuffer]] = []
        self.max_depth = max_depth

    @property
    def can_undo(self) -> bool:
        return bool(self.undo_stack)

    @property
    def can_redo(self) -> bool:
        return bool(self.redo_stack)

    def push(self, description: str, buffer: AudioBuffer) -> AudioBuffer:
        """Record ``buffer`` as the result of an edit and make it current."""
        self.undo_stack.append((description, self.current))
        if len(self.undo_stack) > self.max_depth:
            self.undo_stack.pop(0)
        self.redo_stack.clear()
        self.current = buffer
        logger.debug("Edit pushed: %s", description)
        return buffer

    def undo(self) -> Optional[AudioBuffer]:
        if not self.undo_stack:
            logger.debug("Nothing to undo")
            return None

        description, previous = self.undo_stack.pop()
        self.redo_stack.append((description, self.current))
        self.current = previous
        logger.info("Undo: %s", description)
        return previous

    def redo(self) -> Optional[AudioBuffer]:
        if not self.redo_stack:
            logger.debug("Nothing to redo")
            return None

        description, following = self.redo_stack.pop()
        self.undo_stack.append((description, self.current))
        self.current = following
        logger.info("Redo: %s", description)
        return following

    def clear(self):
        self.undo_stack.clear()
        self.redo_stack.clear()
        logger.debug("Undo/Redo stacks cleared")

    def __len__(self) -> int:
        return len(self.undo_stack)
