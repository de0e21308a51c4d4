"""
Seed fixtures

Initial database written the first time a store finds nothing persisted.
Timestamps are fixed so the default sort order is stable.
"""

import copy
from typing import Any, Dict, List

SEED_USERS: List[Dict[str, Any]] = [
    {
        'id': 'user-admin',
        'name': 'Quản trị viên',
        'email': 'admin@example.com',
        'phone': '0900000000',
        'role': 'admin',
        'avatar_url': 'https://picsum.photos/40/40?random=1',
        'password': 'admin123',
    },
    {
        'id': 'user-agent-1',
        'name': 'Nguyễn Văn An',
        'email': 'agent@example.com',
        'phone': '0901234567',
        'role': 'agent',
        'avatar_url': 'https://picsum.photos/40/40?random=2',
        'password': 'agent123',
    },
    {
        'id': 'user-agent-2',
        'name': 'Trần Thị Bình',
        'email': 'agent2@example.com',
        'phone': '0912345678',
        'role': 'agent',
        'avatar_url': 'https://picsum.photos/40/40?random=3',
        'password': 'agent123',
    },
    {
        'id': 'user-buyer-1',
        'name': 'Lê Minh Châu',
        'email': 'buyer@example.com',
        'phone': '0987654321',
        'role': 'buyer',
        'avatar_url': 'https://picsum.photos/40/40?random=4',
        'password': 'buyer123',
    },
]

SEED_AGENTS: List[Dict[str, Any]] = [
    {
        'id': 'agent-1',
        'name': 'An Phát Realty',
        'phone': '0901234567',
        'email': 'agent@example.com',
        'logo_url': 'https://picsum.photos/80/80?random=11',
        'agent_user_id': 'user-agent-1',
        'rating': 4.5,
        'total_listings': 3,
    },
    {
        'id': 'agent-2',
        'name': 'Bình Minh Land',
        'phone': '0912345678',
        'email': 'agent2@example.com',
        'logo_url': 'https://picsum.photos/80/80?random=12',
        'agent_user_id': 'user-agent-2',
        'rating': 4.0,
        'total_listings': 2,
    },
]

SEED_LISTINGS: List[Dict[str, Any]] = [
    {
        'id': 'listing-1',
        'title': 'Căn hộ 2 phòng ngủ view sông Sài Gòn',
        'description': 'Căn hộ cao cấp, đầy đủ nội thất, gần trung tâm.',
        'price': 4_500_000_000,
        'price_unit': 'VND',
        'type': 'sale',
        'property_type': 'apartment',
        'area': 75,
        'bedrooms': 2,
        'bathrooms': 2,
        'address': '208 Nguyễn Hữu Cảnh',
        'district': 'Bình Thạnh',
        'city': 'Hồ Chí Minh',
        'coords': {'lat': 10.7942, 'lng': 106.7219},
        'images': ['https://picsum.photos/800/600?random=21'],
        'posted_by_user_id': 'user-agent-1',
        'posted_at': '2024-05-01T09:00:00+00:00',
        'status': 'active',
        'views': 120,
        'contact_clicks': 8,
        'is_hidden': False,
    },
    {
        'id': 'listing-2',
        'title': 'Nhà phố 4 tầng mặt tiền kinh doanh',
        'description': 'Nhà mới xây, thích hợp vừa ở vừa kinh doanh.',
        'price': 12_000_000_000,
        'price_unit': 'VND',
        'type': 'sale',
        'property_type': 'house',
        'area': 120,
        'bedrooms': 5,
        'bathrooms': 4,
        'address': '45 Lê Văn Sỹ',
        'district': 'Quận 3',
        'city': 'Hồ Chí Minh',
        'coords': {'lat': 10.7869, 'lng': 106.6796},
        'images': ['https://picsum.photos/800/600?random=22'],
        'posted_by_user_id': 'user-agent-1',
        'posted_at': '2024-05-10T09:00:00+00:00',
        'status': 'active',
        'views': 64,
        'contact_clicks': 5,
        'is_hidden': False,
    },
    {
        'id': 'listing-3',
        'title': 'Cho thuê văn phòng 100m2 quận Hoàn Kiếm',
        'description': 'Văn phòng hạng B, có chỗ để xe, bảo vệ 24/7.',
        'price': 35_000_000,
        'price_unit': '/tháng',
        'type': 'rent',
        'property_type': 'office',
        'area': 100,
        'bedrooms': 0,
        'bathrooms': 1,
        'address': '12 Tràng Tiền',
        'district': 'Hoàn Kiếm',
        'city': 'Hà Nội',
        'coords': {'lat': 21.0245, 'lng': 105.8572},
        'images': ['https://picsum.photos/800/600?random=23'],
        'posted_by_user_id': 'user-agent-2',
        'posted_at': '2024-04-20T09:00:00+00:00',
        'status': 'active',
        'views': 40,
        'contact_clicks': 2,
        'is_hidden': False,
    },
    {
        'id': 'listing-4',
        'title': 'Biệt thự sân vườn ven biển',
        'description': 'Biệt thự có hồ bơi riêng, cách biển 200m.',
        'price': 850_000,
        'price_unit': 'USD',
        'type': 'sale',
        'property_type': 'villa',
        'area': 350,
        'bedrooms': 4,
        'bathrooms': 5,
        'address': '7 Võ Nguyên Giáp',
        'district': 'Sơn Trà',
        'city': 'Đà Nẵng',
        'coords': {'lat': 16.0678, 'lng': 108.2453},
        'images': ['https://picsum.photos/800/600?random=24'],
        'posted_by_user_id': 'user-agent-2',
        'posted_at': '2024-03-15T09:00:00+00:00',
        'status': 'active',
        'views': 210,
        'contact_clicks': 14,
        'is_hidden': False,
    },
    {
        'id': 'listing-5',
        'title': 'Đất nền dự án khu đô thị mới',
        'description': 'Sổ đỏ từng lô, hạ tầng hoàn thiện.',
        'price': 1_800_000_000,
        'price_unit': 'VND',
        'type': 'sale',
        'property_type': 'land',
        'area': 90,
        'bedrooms': 0,
        'bathrooms': 0,
        'address': 'Khu đô thị Lakeview',
        'district': 'Thủ Đức',
        'city': 'Hồ Chí Minh',
        'coords': {'lat': 10.8231, 'lng': 106.7702},
        'images': [],
        'posted_by_user_id': 'user-agent-1',
        'posted_at': '2024-02-01T09:00:00+00:00',
        'status': 'active',
        'views': 12,
        'contact_clicks': 0,
        'is_hidden': True,
    },
]

SEED_FAVORITES: List[Dict[str, Any]] = [
    {
        'id': 'fav-1',
        'user_id': 'user-buyer-1',
        'listing_id': 'listing-1',
        'created_at': '2024-05-02T10:00:00+00:00',
    },
]

SEED_CONVERSATIONS: List[Dict[str, Any]] = [
    {
        'id': 'conv-1',
        'participants': ['user-buyer-1', 'user-agent-1'],
        'last_message_at': '2024-05-02T10:05:00+00:00',
        'messages': [
            {
                'id': 'msg-1',
                'conversation_id': 'conv-1',
                'sender_id': 'user-buyer-1',
                'text': 'Chào anh, căn hộ còn không ạ?',
                'timestamp': '2024-05-02T10:00:00+00:00',
            },
            {
                'id': 'msg-2',
                'conversation_id': 'conv-1',
                'sender_id': 'user-agent-1',
                'text': 'Vẫn còn bạn nhé, bạn muốn xem nhà khi nào?',
                'timestamp': '2024-05-02T10:05:00+00:00',
            },
        ],
    },
]

SEED_PASSWORD_RESET_TOKENS: List[Dict[str, Any]] = []


def build_seed_database() -> Dict[str, List[Dict[str, Any]]]:
    """Fresh deep copy of the fixtures, keyed by collection name."""
    return copy.deepcopy({
        'users': SEED_USERS,
        'listings': SEED_LISTINGS,
        'agents': SEED_AGENTS,
        'favorites': SEED_FAVORITES,
        'conversations': SEED_CONVERSATIONS,
        'savedSearches': [],
        'passwordResetTokens': SEED_PASSWORD_RESET_TOKENS,
    })
