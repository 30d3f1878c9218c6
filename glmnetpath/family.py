from enum import Enum

import numpy as np
from statsmodels.genmod.families import family as sm_family
from statsmodels.genmod.families import links as sm_links

from ._utils import InputValidationError


class Family(Enum):
    """
    The response families with a path solver.

    Each family carries its statsmodels base family (for the link and
    its inverse), a display name and a loss. Adding a family means
    adding a member here, a loss in `glmnetpath.loss` and a path
    fitter in `glmnetpath.paths`.
    """

    NORMAL = 'gaussian'
    BINOMIAL = 'binomial'
    POISSON = 'poisson'

    @property
    def base(self):
        return {'gaussian':sm_family.Gaussian,
                'binomial':sm_family.Binomial,
                'poisson':sm_family.Poisson}[self.value]()

    @property
    def modeltype(self):
        return {'gaussian':'Least Squares',
                'binomial':'Logistic',
                'poisson':'Poisson'}[self.value]

    @property
    def loss_name(self):
        return {'gaussian':'Mean Squared Error',
                'binomial':'Binomial Deviance',
                'poisson':'Poisson Deviance'}[self.value]

    def inverse_link(self,
                     eta):
        """
        Map a linear predictor to the mean scale.
        """
        return self.base.link.inverse(np.asarray(eta, float))

    @classmethod
    def from_family(cls,
                    family):
        """
        Resolve a `Family`, a name or a statsmodels family with its
        canonical link.

        Parameters
        ----------
        family: Union[Family, str, sm_family.Family]
            One of the three supported families.

        Returns
        -------
        Family
        """
        if isinstance(family, cls):
            return family
        if isinstance(family, str):
            name = family.lower()
            for member in cls:
                if name in (member.value, member.name.lower()):
                    return member
            if name == 'logistic':
                return cls.BINOMIAL
        elif isinstance(family, sm_family.Family):
            if (isinstance(family, sm_family.Gaussian) and
                type(family.link) is sm_links.Identity):
                return cls.NORMAL
            if (isinstance(family, sm_family.Binomial) and
                type(family.link) is sm_links.Logit):
                return cls.BINOMIAL
            if (isinstance(family, sm_family.Poisson) and
                type(family.link) is sm_links.Log):
                return cls.POISSON
        raise InputValidationError(f"unsupported family {family!r}; expecting "
                                   "Gaussian, Binomial or Poisson with canonical link")
