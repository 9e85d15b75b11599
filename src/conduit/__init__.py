"""
Conduit - IDE command surface installer

Conduit collects the agents, tasks, tools and workflows contributed by a
set of installed modules and materializes them as slash commands inside an
IDE's configuration directory, together with a navigable index.
"""

__version__ = "1.0.0"
__all__ = ["__version__"]
