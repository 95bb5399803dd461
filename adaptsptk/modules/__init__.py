from .adaptive import BaseAdaptiveModule
from .adaptive import MomentumGradientDescent
from .adaptive import PowerTracker
from .agcep import AdaptiveGeneralizedCepstralAnalysis
from .agcep import AdaptiveGeneralizedCepstralAnalysis as AGCEP
from .agcep import CascadeAllZeroFilter
from .amcep import AdaptiveMelCepstralAnalysis
from .amcep import AdaptiveMelCepstralAnalysis as AMCEP
from .amcep import MelWarpedRegressor
from .b2mc import MLSADigitalFilterCoefficientsToMelCepstrum
from .ignorm import GeneralizedCepstrumInverseGainNormalization
from .mlsadf import MLSADigitalFilter
from .mlsadf import MLSADigitalFilter as MLSA
