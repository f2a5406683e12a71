"""Sample rows for development and test fixtures.

The rows follow the normalized schema: locations, property types and
payment methods live in their own tables and are referenced by id.
Keys are listed in dependency order.
"""
from datetime import date
from decimal import Decimal

ALICE = "11111111-1111-1111-1111-111111111111"
BOB = "22222222-2222-2222-2222-222222222222"
CAROL = "33333333-3333-3333-3333-333333333333"

SPRINGFIELD = "f0000001-0000-0000-0000-000000000001"
METROPOLIS = "f0000002-0000-0000-0000-000000000002"

COTTAGE_TYPE = "f1000001-0000-0000-0000-000000000001"
APARTMENT_TYPE = "f1000002-0000-0000-0000-000000000002"

WIFI = "f2000001-0000-0000-0000-000000000001"
KITCHEN = "f2000002-0000-0000-0000-000000000002"
FIREPLACE = "f2000003-0000-0000-0000-000000000003"

COZY_COTTAGE = "aaaaaaa1-aaaa-aaaa-aaaa-aaaaaaaaaaa1"
URBAN_APARTMENT = "aaaaaaa2-aaaa-aaaa-aaaa-aaaaaaaaaaa2"

BOOKING_COTTAGE = "bbbbbbb1-bbbb-bbbb-bbbb-bbbbbbbbbbb1"
BOOKING_APARTMENT = "bbbbbbb2-bbbb-bbbb-bbbb-bbbbbbbbbbb2"

BOB_CARD = "c0000001-cccc-cccc-cccc-ccccccccccc1"
BOB_PAYPAL = "c0000002-cccc-cccc-cccc-ccccccccccc2"

SAMPLE = {
    "users": [
        {"id": ALICE, "first_name": "Alice", "last_name": "Smith", "email": "alice@example.com",
         "phone_number": "1234567890", "role": "host"},
        {"id": BOB, "first_name": "Bob", "last_name": "Johnson", "email": "bob@example.com",
         "phone_number": None, "role": "guest"},
        {"id": CAROL, "first_name": "Carol", "last_name": "Williams", "email": "carol@example.com",
         "phone_number": "0987654321", "role": "admin"},
    ],
    "locations": [
        {"id": SPRINGFIELD, "city": "Springfield", "state": "IL", "country": "USA", "postal_code": "62701"},
        {"id": METROPOLIS, "city": "Metropolis", "state": "NY", "country": "USA", "postal_code": "10001"},
    ],
    "property_types": [
        {"id": COTTAGE_TYPE, "type_name": "cottage", "description": "Detached rural house"},
        {"id": APARTMENT_TYPE, "type_name": "apartment", "description": "Unit in a multi-storey building"},
    ],
    "amenities": [
        {"id": WIFI, "amenity_name": "wifi", "description": "Wireless internet"},
        {"id": KITCHEN, "amenity_name": "kitchen", "description": "Fully equipped kitchen"},
        {"id": FIREPLACE, "amenity_name": "fireplace", "description": "Wood-burning fireplace"},
    ],
    "properties": [
        {"id": COZY_COTTAGE, "owner_id": ALICE, "location_id": SPRINGFIELD, "property_type_id": COTTAGE_TYPE,
         "name": "Cozy Cottage", "description": "A small cozy cottage in the woods.",
         "price_per_night": Decimal("120.00")},
        {"id": URBAN_APARTMENT, "owner_id": ALICE, "location_id": METROPOLIS, "property_type_id": APARTMENT_TYPE,
         "name": "Urban Apartment", "description": "Modern apartment in the city center.",
         "price_per_night": Decimal("200.00")},
    ],
    "property_amenities": [
        {"property_id": COZY_COTTAGE, "amenity_id": WIFI},
        {"property_id": COZY_COTTAGE, "amenity_id": FIREPLACE},
        {"property_id": URBAN_APARTMENT, "amenity_id": WIFI},
        {"property_id": URBAN_APARTMENT, "amenity_id": KITCHEN},
    ],
    "bookings": [
        {"id": BOOKING_COTTAGE, "property_id": COZY_COTTAGE, "user_id": BOB,
         "start_date": date(2025, 9, 1), "end_date": date(2025, 9, 5),
         "total_price": Decimal("480.00"), "status": "confirmed"},
        {"id": BOOKING_APARTMENT, "property_id": URBAN_APARTMENT, "user_id": BOB,
         "start_date": date(2025, 10, 10), "end_date": date(2025, 10, 12),
         "total_price": Decimal("400.00"), "status": "pending"},
    ],
    "payment_methods": [
        {"id": BOB_CARD, "user_id": BOB, "method_type": "credit_card", "is_default": True},
        {"id": BOB_PAYPAL, "user_id": BOB, "method_type": "paypal", "is_default": False},
    ],
    "payments": [
        {"id": "ccccccc1-cccc-cccc-cccc-ccccccccccc1", "booking_id": BOOKING_COTTAGE, "payment_method_id": BOB_CARD,
         "amount": Decimal("480.00"), "status": "completed", "transaction_id": "txn-0001"},
        {"id": "ccccccc2-cccc-cccc-cccc-ccccccccccc2", "booking_id": BOOKING_APARTMENT, "payment_method_id": BOB_PAYPAL,
         "amount": Decimal("400.00"), "status": "pending", "transaction_id": "txn-0002"},
    ],
    "reviews": [
        {"id": "ddddddd1-dddd-dddd-dddd-ddddddddddd1", "property_id": COZY_COTTAGE, "user_id": BOB,
         "booking_id": BOOKING_COTTAGE, "rating": 5, "comment": "Amazing stay, highly recommended!"},
        {"id": "ddddddd2-dddd-dddd-dddd-ddddddddddd2", "property_id": URBAN_APARTMENT, "user_id": BOB,
         "booking_id": BOOKING_APARTMENT, "rating": 4, "comment": "Great location, clean apartment."},
    ],
    "messages": [
        {"id": "eeeeeee1-eeee-eeee-eeee-eeeeeeeeeee1", "sender_id": BOB, "recipient_id": ALICE,
         "booking_id": None, "review_id": None, "subject": "Availability",
         "message_body": "Hi, is the cottage available for next weekend?", "is_read": True},
        {"id": "eeeeeee2-eeee-eeee-eeee-eeeeeeeeeee2", "sender_id": ALICE, "recipient_id": BOB,
         "booking_id": None, "review_id": None, "subject": "Re: Availability",
         "message_body": "Yes, it is available!", "is_read": False},
    ],
}
