"""Core modules for the Finance Tracker application."""

from . import aggregate, compare, config, export, insights, models, periods, store, synth, utils, viz

__all__ = [
	"aggregate",
	"compare",
	"config",
	"export",
	"insights",
	"models",
	"periods",
	"store",
	"synth",
	"utils",
	"viz",
]
