from .user import User
from .admin import Admin, AdminRole
from .category import Category, CategoryType
from .photo import Photo, PhotoVote, VoteType
from .leaderboard import LeaderboardEntry
from .hall_of_fame import HallOfFameEntry

__all__ = [
    "User",
    "Admin",
    "AdminRole",
    "Category",
    "CategoryType",
    "Photo",
    "PhotoVote",
    "VoteType",
    "LeaderboardEntry",
    "HallOfFameEntry",
]
