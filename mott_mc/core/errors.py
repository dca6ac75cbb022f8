"""Exceptions raised by mott_mc."""


class MottCrossSectionError(Exception):
    """Base class for all mott_mc errors."""


class ModelNotInitialisedError(MottCrossSectionError):
    """Kinematics requested before initialise() bound a particle."""


class KinematicsNotSetError(MottCrossSectionError):
    """Cross-section requested before setup_kinematic() was called."""


class CrossSectionNotComputedError(MottCrossSectionError):
    """Angle distribution or sampling requested before any total cross-section."""


class StaleCrossSectionError(MottCrossSectionError):
    """
    The stored total cross-section belongs to an older kinematic context.

    Only raised by models constructed with strict=True; otherwise the stale
    total is reused and a warning is logged.
    """
