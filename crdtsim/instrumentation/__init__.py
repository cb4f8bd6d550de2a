"""Instrumentation for observing replica convergence."""

from crdtsim.instrumentation.recorder import ConvergenceRecorder

__all__ = ["ConvergenceRecorder"]
