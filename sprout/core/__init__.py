"""Pure planning core for sprout.

Nothing in this package touches the filesystem, spawns processes, or reads
the environment. Command handlers gather a context through the effects
capability, call a planner from here, and hand the resulting Plan to the
executor.
"""
