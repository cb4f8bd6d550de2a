"""Charts for recorded simulations."""

from crdtsim.visual.convergence import plot_convergence

__all__ = ["plot_convergence"]
