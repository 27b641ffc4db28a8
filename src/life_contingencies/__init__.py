"""
life-contingencies: Mortality tables, survival probabilities, commutation
functions, and present values of life insurances and annuities.

Quick Start
-----------
>>> from life_contingencies import MortalityLoader, MortTableConfig, aax, Ax
>>> mt = MortTableConfig.build(MortalityLoader().am92())
>>> aax(mt, 0.04, 50)
17.444...
>>> Ax(mt, 0.04, 50, moment=2)
0.13065...

Version: 0.1.0
"""

__version__ = "0.1.0"

# =============================================================================
# Mortality Tables
# =============================================================================
from life_contingencies.tables import (
    Assumption,
    MortalityData,
    MortalityFormatError,
    MortalityTable,
    MortTableConfig,
    TableLookupError,
    canonicalize,
    project,
)

# =============================================================================
# Loaders
# =============================================================================
from life_contingencies.loaders.mortality import MortalityLoader

# =============================================================================
# Configuration
# =============================================================================
from life_contingencies.config.settings import SETTINGS

# =============================================================================
# Validation
# =============================================================================
from life_contingencies.validation.checks import ParameterValidationError, ValidationReport

# =============================================================================
# Single-Life Functions
# =============================================================================
from life_contingencies.single_life import (
    CashFlowProfile,
    CashFlowStructure,
    CashFlowTiming,
    Contingency,
    SingleLifeParams,
    SurvivalDomainError,
    present_value,
    # Survival
    tpx,
    tqx,
    # Commutation
    Cx,
    Dx,
    Mx,
    Nx,
    Rx,
    Sx,
    # Benefits
    Ax,
    Ax1n,
    Axn,
    Axn1,
    DAx1n,
    DAxn,
    Exn,
    IAx,
    IAx1n,
    IAxn,
    gAx,
    gAx1n,
    gAxn,
    gExn,
    # Annuities
    Daaxn,
    Daxn,
    Iaax,
    Iaaxn,
    Iax,
    Iaxn,
    aax,
    aaxn,
    ax,
    axn,
    gaax,
    gaaxn,
    gax,
    gaxn,
)

__all__ = [
    # Version
    "__version__",
    # Tables
    "Assumption",
    "MortalityData",
    "MortalityTable",
    "MortTableConfig",
    "canonicalize",
    "project",
    "MortalityFormatError",
    "TableLookupError",
    # Loaders
    "MortalityLoader",
    # Config
    "SETTINGS",
    # Validation
    "ParameterValidationError",
    "ValidationReport",
    # Kernel
    "Contingency",
    "CashFlowStructure",
    "CashFlowTiming",
    "CashFlowProfile",
    "SingleLifeParams",
    "present_value",
    # Survival
    "tpx",
    "tqx",
    "SurvivalDomainError",
    # Commutation
    "Dx",
    "Cx",
    "Nx",
    "Mx",
    "Sx",
    "Rx",
    # Benefits
    "Exn",
    "Axn1",
    "Ax1n",
    "Ax",
    "Axn",
    "IAx1n",
    "IAx",
    "IAxn",
    "DAx1n",
    "DAxn",
    "gExn",
    "gAx",
    "gAx1n",
    "gAxn",
    # Annuities
    "aax",
    "aaxn",
    "ax",
    "axn",
    "Iaax",
    "Iaaxn",
    "Iax",
    "Iaxn",
    "Daaxn",
    "Daxn",
    "gaax",
    "gaaxn",
    "gax",
    "gaxn",
]
