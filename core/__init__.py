"""
Issue Tracker Core Library.

This package provides the issue-mutation pipeline and issue listing for the
issue tracker: database management, models, repositories, services,
notifications and logging.

Usage:
    # Database
    from core.db import db, get_db
    from core.models import User, Project, Issue, Comment, ActivityLog
    from core.repositories import IssueRepository, UserRepository

    # Services
    from core.services import IssueService, CommentService, IssueQueryEngine

    # Config
    from core.config import get_settings, Settings

    # Logging
    from core.logging import get_logger, configure_logging
"""

__version__ = "1.0.0"

# Lazy imports to avoid circular dependencies
# Users should import directly from submodules:
#   from core.db import db
#   from core.config import get_settings
#   from core.logging import get_logger
