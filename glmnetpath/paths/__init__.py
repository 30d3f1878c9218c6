# fast paths

from .fastnet import (FastNetControl,
                      FastNetSpec,
                      FastNetMixin)
from .gaussnet import GaussNet
from .lognet import LogNet
from .fishnet import FishNet
