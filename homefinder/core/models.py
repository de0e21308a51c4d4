"""
Data models for the classifieds store.

Every entity is stored as a plain dict inside the collection store; these
dataclasses are the typed view services hand back to callers.
"""

from dataclasses import dataclass, field, asdict, fields
from enum import Enum
from typing import Any, Dict, List, Optional


class UserRole(str, Enum):
    """Account role."""
    BUYER = 'buyer'
    AGENT = 'agent'
    ADMIN = 'admin'


class ListingType(str, Enum):
    """Sale or rental ad."""
    SALE = 'sale'
    RENT = 'rent'


class PropertyType(str, Enum):
    APARTMENT = 'apartment'
    HOUSE = 'house'
    LAND = 'land'
    OFFICE = 'office'
    SHOPHOUSE = 'shophouse'
    VILLA = 'villa'


class ListingStatus(str, Enum):
    """Lifecycle of a listing."""
    ACTIVE = 'active'
    SOLD = 'sold'
    RENTED = 'rented'
    EXPIRED = 'expired'


DEFAULT_AVATAR_URL = 'https://picsum.photos/40/40?grayscale'


def _known(cls, data: Dict[str, Any]) -> Dict[str, Any]:
    """Drop keys the dataclass does not declare."""
    names = {f.name for f in fields(cls)}
    return {k: v for k, v in data.items() if k in names}


@dataclass
class User:
    """Account record. `password` is only populated inside the store."""
    id: str
    name: str
    email: str
    phone: str = ''
    role: UserRole = UserRole.BUYER
    avatar_url: str = DEFAULT_AVATAR_URL
    password: Optional[str] = None

    @classmethod
    def from_dict(cls, data: dict) -> 'User':
        values = _known(cls, data)
        values['role'] = UserRole(values.get('role', UserRole.BUYER))
        return cls(**values)

    def to_dict(self) -> Dict[str, Any]:
        d = asdict(self)
        d['role'] = self.role.value
        if self.password is None:
            d.pop('password')
        return d


def public_user(record: dict) -> User:
    """Project a stored user record for use outside the store: never carries the password."""
    user = User.from_dict(record)
    user.password = None
    return user


@dataclass
class Agent:
    """Agency profile linked to exactly one agent user."""
    id: str
    name: str
    phone: str
    email: str
    agent_user_id: str
    logo_url: str = ''
    rating: float = 0.0  # 0-5
    total_listings: int = 0

    @classmethod
    def from_dict(cls, data: dict) -> 'Agent':
        return cls(**_known(cls, data))

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class Coords:
    lat: float = 0.0
    lng: float = 0.0


@dataclass
class Listing:
    """Property ad."""
    id: str
    title: str
    description: str
    price: float
    price_unit: str
    type: ListingType
    property_type: PropertyType
    area: float
    bedrooms: int
    bathrooms: int
    address: str
    district: str
    city: str
    posted_by_user_id: str
    posted_at: str
    coords: Coords = field(default_factory=Coords)
    images: List[str] = field(default_factory=list)
    status: ListingStatus = ListingStatus.ACTIVE
    views: int = 0
    contact_clicks: int = 0
    is_hidden: bool = False

    @classmethod
    def from_dict(cls, data: dict) -> 'Listing':
        values = _known(cls, data)
        values['type'] = ListingType(values['type'])
        values['property_type'] = PropertyType(values['property_type'])
        values['status'] = ListingStatus(values.get('status', ListingStatus.ACTIVE))
        coords = values.get('coords') or {}
        values['coords'] = coords if isinstance(coords, Coords) else Coords(**coords)
        values['images'] = list(values.get('images') or [])
        values['views'] = values.get('views') or 0
        values['contact_clicks'] = values.get('contact_clicks') or 0
        return cls(**values)

    def to_dict(self) -> Dict[str, Any]:
        d = asdict(self)
        d['type'] = self.type.value
        d['property_type'] = self.property_type.value
        d['status'] = self.status.value
        return d


@dataclass
class Favorite:
    id: str
    user_id: str
    listing_id: str
    created_at: str

    @classmethod
    def from_dict(cls, data: dict) -> 'Favorite':
        return cls(**_known(cls, data))

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class Message:
    """Immutable chat message."""
    id: str
    conversation_id: str
    sender_id: str
    text: str
    timestamp: str

    @classmethod
    def from_dict(cls, data: dict) -> 'Message':
        return cls(**_known(cls, data))

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class Conversation:
    """Two-party thread. `last_message_at` tracks the newest message."""
    id: str
    participants: List[str]
    last_message_at: str
    messages: List[Message] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: dict) -> 'Conversation':
        values = _known(cls, data)
        values['participants'] = list(values.get('participants') or [])
        values['messages'] = [
            m if isinstance(m, Message) else Message.from_dict(m)
            for m in values.get('messages') or []
        ]
        return cls(**values)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @property
    def last_message(self) -> Optional[Message]:
        return self.messages[-1] if self.messages else None


@dataclass
class ListingFilters:
    """Search criteria for listings. Unset fields do not constrain."""
    type: Optional[ListingType] = None
    property_type: Optional[PropertyType] = None
    min_price: Optional[float] = None
    max_price: Optional[float] = None
    min_area: Optional[float] = None
    max_area: Optional[float] = None
    bedrooms: Optional[int] = None
    district: Optional[str] = None
    city: Optional[str] = None
    search_query: Optional[str] = None
    include_hidden: bool = False

    @classmethod
    def from_dict(cls, data: Optional[dict]) -> 'ListingFilters':
        values = _known(cls, data or {})
        if values.get('type'):
            values['type'] = ListingType(values['type'])
        if values.get('property_type'):
            values['property_type'] = PropertyType(values['property_type'])
        values['include_hidden'] = bool(values.get('include_hidden', False))
        return cls(**values)

    def to_dict(self) -> Dict[str, Any]:
        """Serialize set criteria only."""
        d = {}
        for f in fields(self):
            value = getattr(self, f.name)
            if value is None or value == '':
                continue
            d[f.name] = value.value if isinstance(value, Enum) else value
        if not self.include_hidden:
            d.pop('include_hidden', None)
        return d


@dataclass
class SavedSearch:
    id: str
    user_id: str
    name: str
    created_at: str
    filters: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: dict) -> 'SavedSearch':
        values = _known(cls, data)
        values['filters'] = dict(values.get('filters') or {})
        return cls(**values)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    def to_filters(self) -> ListingFilters:
        return ListingFilters.from_dict(self.filters)


@dataclass
class PasswordResetToken:
    id: str
    user_id: str
    token: str
    expires_at: str

    @classmethod
    def from_dict(cls, data: dict) -> 'PasswordResetToken':
        return cls(**_known(cls, data))

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)
