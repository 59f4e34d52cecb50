"""Strongly typed identifiers for Agora domain entities.

Every entity is keyed by a database-sequence integer. NewType keeps a PostId
from being passed where a CommentId is expected.
"""

from typing import NewType

UserId = NewType("UserId", int)
PostId = NewType("PostId", int)
CommentId = NewType("CommentId", int)
PollId = NewType("PollId", int)
PollOptionId = NewType("PollOptionId", int)
