"""py.test standard config file."""

# pylint: disable=invalid-name

collect_ignore = ("setup.py",)

# pylint: enable=invalid-name
