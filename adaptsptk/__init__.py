from . import functional
from .errors import ArgumentError
from .errors import CollaboratorError
from .errors import ConfigurationError
from .modules import *
from .signals import *

from .version import __version__  # isort:skip
