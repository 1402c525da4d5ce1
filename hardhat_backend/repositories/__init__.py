"""Repository layer for database access"""
from .event_repository import EventRepository
from .hardhat_repository import HardHatRepository
