"""
Rendering Context

Responsibilities:
- Renders compile commands for notes
- Runs the compile commands in parallel on a fixed-size thread pool
- Collects per-note success or failure without aborting the batch

Owns: External command execution
Never: Modifies note content
"""
