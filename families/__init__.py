from .bernoulli import dbern, pbern, qbern, rbern
from .categorical import dcat, pcat, qcat, rcat
from .gamma_poisson import dgpois, pgpois, rgpois
from .huber import dhuber, phuber, qhuber, rhuber
from .kumaraswamy import dkumar, pkumar, qkumar, rkumar
from .laplace import dlaplace, plaplace, qlaplace, rlaplace
from .multinomial import dmnom, rmnom
from .power import dpower, ppower, qpower, rpower
from .proportion import dprop, pprop, qprop, rprop
from .rayleigh import drayleigh, prayleigh, qrayleigh, rrayleigh
from .tukey_lambda import qtlambda, rtlambda
from .zib import dzib, pzib, qzib, rzib

__all__ = [
    "dbern", "pbern", "qbern", "rbern",
    "dcat", "pcat", "qcat", "rcat",
    "dgpois", "pgpois", "rgpois",
    "dhuber", "phuber", "qhuber", "rhuber",
    "dkumar", "pkumar", "qkumar", "rkumar",
    "dlaplace", "plaplace", "qlaplace", "rlaplace",
    "dmnom", "rmnom",
    "dpower", "ppower", "qpower", "rpower",
    "dprop", "pprop", "qprop", "rprop",
    "drayleigh", "prayleigh", "qrayleigh", "rrayleigh",
    "qtlambda", "rtlambda",
    "dzib", "pzib", "qzib", "rzib",
]
