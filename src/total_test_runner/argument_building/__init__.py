"""Argument building exports."""

from .argument_list import MASK, ArgumentList, ArgumentToken, escape_for_script, quote_whole_token
from .build_context import ArgumentBuildError, BuildContext
from .connection_resolution import resolve_credential, resolve_host_connection
from .functional_test_arguments import build_functional_arguments, repository_url
from .runner_arguments import build_run_arguments, script_filename
from .test_selection import is_special_test_name, is_test_name_list, uses_test_name_list
from .unit_test_arguments import build_unit_arguments, resolve_project_folder

__all__ = [
    "MASK",
    "ArgumentList",
    "ArgumentToken",
    "escape_for_script",
    "quote_whole_token",
    "ArgumentBuildError",
    "BuildContext",
    "resolve_credential",
    "resolve_host_connection",
    "build_functional_arguments",
    "repository_url",
    "build_run_arguments",
    "script_filename",
    "is_special_test_name",
    "is_test_name_list",
    "uses_test_name_list",
    "build_unit_arguments",
    "resolve_project_folder",
]
