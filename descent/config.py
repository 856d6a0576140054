"""
module-level settings for the analyzer and its command-line shell.
"""

# lines starting with this marker are dropped before tokenizing
COMMENT_MARKER = "#"

# label of the diamond-shaped root node written by the header
ROOT_LABEL = "PARSE TREE"

# what the lexer reports as the lexeme once the input is exhausted
EOF_LEXEME = "EOF"

# label given to epsilon leaves
EMPTY_LABEL = "EMPTY"

# online graphviz viewers:
#   http://www.webgraphviz.com
#   http://viz-js.com
#   https://dreampuf.github.io/GraphvizOnline
WEBGRAPHVIZ_HOME = "https://dreampuf.github.io/GraphvizOnline/"

# browsers refuse "GET" urls past roughly this length
URL_LENGTH_LIMIT = 32_000

# artifacts
DEFAULT_OUTPUT_STEM = "parse_tree"
DEFAULT_RENDER_FORMAT = "png"
RENDER_FORMATS = ("png", "svg", "pdf")

# every production call is one python frame; a token opens at most this many of them
FRAMES_PER_TOKEN = 4
# never raise the interpreter's recursion limit past this
RECURSION_LIMIT_CAP = 50_000
