"""
Service layer — the operations the API exposes.

contacts: list_contacts, record_contact (bidirectional reconciliation)
ratings: submit_rating, get_my_rating, get_my_ratings (toggle ratings, quality score)
users: save_profile, search_users, get_profile
outbound: NotificationDispatcher, ProfilePictureResolver
navigation: NavTab, TabSelectionStore (active tab shared by client views)
"""

from backend_lingua.services.contacts import ContactView, list_contacts, record_contact
from backend_lingua.services.navigation import NavTab, TabSelectionStore
from backend_lingua.services.notifications import NotificationDispatcher
from backend_lingua.services.profile_pictures import ProfilePictureResolver
from backend_lingua.services.ratings import get_my_rating, get_my_ratings, submit_rating
from backend_lingua.services.users import get_profile, save_profile, search_users

__all__ = [
    "ContactView",
    "list_contacts",
    "record_contact",
    "NavTab",
    "TabSelectionStore",
    "NotificationDispatcher",
    "ProfilePictureResolver",
    "get_my_rating",
    "get_my_ratings",
    "submit_rating",
    "get_profile",
    "save_profile",
    "search_users",
]
