import uuid
from dataclasses import dataclass, field

from .buffer import AudioBuffer


@dataclass
class Track:
    """
    A track as seen by the mix engine: a buffer plus its mute state.
    """
    buffer: AudioBuffer
    muted: bool = False
    name: str = "Track"
    id: str = field(default_factory=lambda: uuid.uuid4().hex)

    @property
    def duration_samples(self) -> int:
        """Returns the total number of frames in the track."""
        return self.buffer.frame_count

    @property
    def duration_seconds(self) -> float:
        """Returns the duration of the track in seconds."""
        return self.buffer.duration

    def with_buffer(self, buffer: AudioBuffer) -> "Track":
        """Same track identity holding a new buffer."""
        return Track(buffer=buffer, muted=self.muted, name=self.name, id=self.id)

    def __repr__(self) -> str:
        state = " muted" if self.muted else ""
        return f"Track({self.name!r}, {self.duration_seconds:.2f}s{state})"
