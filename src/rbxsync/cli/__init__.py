"""Command-line interface for rbxsync."""

from __future__ import annotations

import asyncio as asyncio
import logging as logging

from rbxsync import RbxSync as RbxSync
from rbxsync import load_config as load_config
from rbxsync import load_environment as load_environment
from rbxsync.cli.app import main as main
from rbxsync.cli.commands import export as export_command
from rbxsync.cli.commands import publish as publish_command
from rbxsync.cli.commands import run as run_command
from rbxsync.cli.commands import validate as validate_command
from rbxsync.cli.parser import _package_version as _package_version
from rbxsync.cli.parser import build_parser as build_parser

_format_run_summary = run_command.format_run_summary
_format_publish_summary = publish_command.format_publish_summary
_format_validate_summary = validate_command.format_validate_summary

_run_sync = run_command.run_sync
_run_publish = publish_command.run_publish
_run_validate = validate_command.run_validate
_run_export = export_command.run_export
