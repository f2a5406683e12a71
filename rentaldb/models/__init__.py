from .user import User, UserRole
from .location import Location
from .property_type import PropertyType
from .amenity import Amenity, property_amenities
from .property import Property
from .booking import Booking, BookingStatus
from .payment_method import PaymentMethod, PaymentMethodType
from .payment import Payment, PaymentStatus
from .review import Review
from .message import Message
