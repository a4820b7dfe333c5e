"""
Templating Context

Responsibilities:
- Loads the profile and its template store
- Assembles the layered render context of notes and master notes
- Renders templates with the helper set (arithmetic, case, dates, paths)
- Writes new notes and regenerates master notes

Owns: Profile, render context, template rendering
Never: Decides which files exist on the shelf (delegates to shelving)
"""

from noteshelf.contexts.templating.context_builder import (
    build_master_context,
    build_note_context,
)
from noteshelf.contexts.templating.master import (
    aggregate,
    build_master_note,
    effective_file_globs,
    generate_master_notes,
)
from noteshelf.contexts.templating.notes import create_notes
from noteshelf.contexts.templating.profile import Profile, init_profile, load_profile
from noteshelf.contexts.templating.registries import TemplateRegistry

__all__ = [
    # Profile
    "Profile",
    "load_profile",
    "init_profile",
    # Render context
    "build_note_context",
    "build_master_context",
    # Rendering templates
    "TemplateRegistry",
    # Orchestrators
    "create_notes",
    "aggregate",
    "build_master_note",
    "effective_file_globs",
    "generate_master_notes",
]
