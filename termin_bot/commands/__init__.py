"""
Module: termin_bot/commands

Package initializer for the commands module. Registers slash command handlers via decorators.
"""
# No additional code required; commands are registered via decorators in individual files.
