from .overlay import ModalOverlay
from .panels import EmailContentView, EmailListView, StatusBar

__all__ = ["EmailContentView", "EmailListView", "ModalOverlay", "StatusBar"]
