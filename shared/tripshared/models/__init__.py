from tripshared.models.user import CurrentUser, stable_user_id
from tripshared.models.pagination import Page, PageRequest, SortOrder

__all__ = ["CurrentUser", "stable_user_id", "Page", "PageRequest", "SortOrder"]
