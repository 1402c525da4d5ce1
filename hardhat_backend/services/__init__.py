"""Service layer for business logic"""
from .event_service import EventService
from .hardhat_service import HardHatService
