"""
noteshelf - a shelf of LaTeX study notes

Keeps LaTeX notes in nested subject folders under a shelf directory, renders
new notes from profile templates and compiles them in parallel.

Architecture:
- Shelving Context: Name canonicalization, path resolution and filesystem writes
- Templating Context: Profile, layered render context, templates and master notes
- Rendering Context: Parallel compilation of rendered notes
"""

__version__ = "0.1.0"
