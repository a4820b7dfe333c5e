"""
Default profile values and built-in templates.

The built-in templates are registered before the profile's own template files,
so a profile only has to ship the templates it wants to change.
"""

PROFILE_METADATA_FILE = "profile.toml"
PROFILE_TEMPLATES_DIR = "templates"
TEMPLATE_SUFFIX = ".tex.jinja"

DEFAULT_PROFILE_NAME = "noteshelf"
DEFAULT_PROFILE_VERSION = "0.1.0"

NOTE_TEMPLATE_KEY = "_default"
MASTER_TEMPLATE_KEY = "master/_default"

DEFAULT_NOTE_TEMPLATE = r"""\documentclass[class=memoir, crop=false, oneside, 14pt]{standalone}

% document metadata
\author{ {{- profile.name -}} }
\title{ {{- note.title -}} }
\date{ {{- reldate() -}} }

\begin{document}
Sample content.

{{ subject.name }}
\end{document}
"""

DEFAULT_MASTER_TEMPLATE = r"""\documentclass[class=memoir, crop=false, oneside, 12pt]{standalone}

% document metadata
\author{ {{- profile.name -}} }
\title{ {{- subject.name -}} }
\date{ {{- reldate() -}} }

\begin{document}
% Frontmatter of the class note

<%% for note in master.notes %%>
Note: {{ note.title }}
<%% endfor %%>

\end{document}
"""

BUILTIN_TEMPLATES = {
    NOTE_TEMPLATE_KEY: DEFAULT_NOTE_TEMPLATE,
    MASTER_TEMPLATE_KEY: DEFAULT_MASTER_TEMPLATE,
}
