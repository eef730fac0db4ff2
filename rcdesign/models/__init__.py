# Data models for Thai-standard RC beam and footing design
from .inputs import (
    BeamInputs, DoubleBeamInputs, ReinforcementLayer,
    ConcreteGrade, SteelGrade, DeformedBar, RoundBar, CalculationMethod
)
from .outputs import (
    CalculationStep, DesignStatus,
    SectionProperties, DoubleSectionProperties,
    WSDResults, SDMResults, DoubleWSDResults, DoubleSDMResults,
    SingleBeamResults, DoubleBeamResults
)
from .footing import (
    JointReaction, PointLocation, ProcessedFooting, CalculatedFooting,
    CriticalFooting, ReinforcementInputs, UtilizationBand
)
