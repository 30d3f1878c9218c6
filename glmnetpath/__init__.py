# fast paths

from .paths import (GaussNet,
                    LogNet,
                    FishNet,
                    FastNetControl)

from .family import Family
from .compressed import CompressedPredictorMatrix
from .path import GLMNetPath
from .loss import (MSE,
                   LogisticDeviance,
                   PoissonDeviance,
                   devloss,
                   path_loss)
from .glmnet import glmnet
from .cv import (glmnetcv,
                 make_folds,
                 GLMNetCrossValidation)
from ._utils import (InputValidationError,
                     SolverFatalError,
                     SolverWarning)

from .info import VERSION as __version__
