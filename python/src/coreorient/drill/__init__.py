# Copyright (C) 2026 Darkmine Pty Ltd
# SPDX-License-Identifier: GPL-3.0-or-later

from . import geometry, structural, desurvey, stereonet, trios, validate, model

__all__ = [
	"geometry",
	"structural",
	"desurvey",
	"stereonet",
	"trios",
	"validate",
	"model",
]
