"""
Example machines.

Each module exposes machine_config(), interpreter_config() and
build_interpreter(), the latter usable as `statefold run --interpreter
statefold.examples.<name>:build_interpreter`.
"""
