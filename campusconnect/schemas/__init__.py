from .auth import Token, SignupRequest, LoginRequest
from .user import Actor, User, UserUpdate
from .event import Event, EventCreate, EventUpdate, Banner, Organizer
from .registration import Registration, RegistrationStatus, RegistrationCount, RegisteredEvent
from .ticket import TicketPayload, TicketResponse
from .attendance import ScanOutcome, ScanRequest, ScanResult
from .ai import (
    ColorScheme, DescriptionRequest, DescriptionResponse,
    BannerRequest, BannerResult, BannerResponse
)
