from .auth import AdminLogin, LoginResponse
from .contact import ContactCreate, ContactReply, ContactResponse, FieldViolation
