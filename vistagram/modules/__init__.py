"""
Modules package initialization.
This package contains all the functional modules of the application.
"""

from vistagram.modules import photos
from vistagram.modules import posts
from vistagram.modules import users
