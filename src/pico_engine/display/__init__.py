"""Screen composition shared by every host."""

from .frame import Frame, FrameComposer, FrameRow, Segment

__all__ = ["Frame", "FrameComposer", "FrameRow", "Segment"]
