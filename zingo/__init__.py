# Zingo: workspaces, boards, columns and cards persisted as JSON documents.
#
# Components:
#   schema.py     - Data model (Workspace, Board, Column, Card, Person, Settings)
#   store.py      - JSON file persistence, one document per entity
#   mutations.py  - Copy-on-write transforms over board/workspace snapshots
#   service.py    - Mutation + persistence orchestration with change events
#   navigation.py - Active screen, selected workspace, mirrored settings
#   config.py     - YAML configuration
#   app.py        - Application context and logging setup

from .errors import ZingoError, SchemaError, ConfigError

__version__ = "1.0.0"
