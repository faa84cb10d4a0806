"""Core modules for the Finance Tracker application."""

from . import (
    config,
    features,
    forms,
    identity,
    insights,
    logging_setup,
    models,
    periods,
    session,
    store,
    synth,
    utils,
    viz,
)

__all__ = [
	"config",
	"features",
	"forms",
	"identity",
	"insights",
	"logging_setup",
	"models",
	"periods",
	"session",
	"store",
	"synth",
	"utils",
	"viz",
]
