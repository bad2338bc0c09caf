from .common import CamelModel
from .user import UserSummary
from .product import (
	ProductKind,
	ProductSummary,
)
from .meeting import (
	Coordinates,
	MeetingLocation,
	MeetingProposal,
)
from .message import (
	MessageCreate,
	MessageResponse,
	UnreadCountResponse,
)
from .conversation import ConversationResponse


__all__ = [
	"CamelModel",
	"UserSummary",
	"ProductKind",
	"ProductSummary",
	"Coordinates",
	"MeetingLocation",
	"MeetingProposal",
	"MessageCreate",
	"MessageResponse",
	"UnreadCountResponse",
	"ConversationResponse",
]
