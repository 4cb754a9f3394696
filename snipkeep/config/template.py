"""Default configuration template.

This template is written to ~/.config/snipkeep/config.toml
when running `snipkeep config init`.
"""

CONFIG_TEMPLATE = """\
# snipkeep configuration

[defaults]
# Snippets shown before "load more" is needed
page_size = 12

[storage]
# JSON document holding your snippets and style object
# data_file = "~/.config/snipkeep/snippets.json"
"""
