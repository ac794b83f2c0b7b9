import html
import logging
from typing import List, Optional

from config import Settings, get_settings
from elements import build_network
from models import EmptyNetwork, EmptyNetworkError, NetworkStyle
from table import Table

LOGGER = logging.getLogger(__name__)

STANDALONE_CSS = """<style>
	#cy {
	  height: 100%;
	  width: 100%;
	  position: absolute;
	  left: 0;
	  border: 2px solid;
	}
	</style>"""

EMBEDDED_CSS = """<style>
	#cy {
	  height: 600px;
	  width: 600px;
	  position: relative;
	  left: 0;
	  border: 2px solid;
	}</style>"""

# ---- JavaScript (not an f-string: the JS braces stay literal) ----
MAIN_SCRIPT = """
<script>
$(function(){ // on dom ready

  var cy = cytoscape({
    container: $('#cy')[0],

    style: cytoscape.stylesheet()
      .selector('node')
      .css({
        'content': 'data(name)',
        'text-valign': 'center',
        'color': 'white',
        'text-outline-width': 2,
        'shape': 'data(shape)',
        'text-outline-color': 'data(color)',
        'background-color': 'data(color)'
      })
      .selector('edge')
      .css({
        'line-color': 'data(color)',
        'source-arrow-color': 'data(color)',
        'target-arrow-color': 'data(color)',
        'source-arrow-shape': 'data(sourceShape)',
        'target-arrow-shape': 'data(targetShape)'
      })
      .selector(':selected')
      .css({
        'background-color': 'black',
        'line-color': 'black',
        'target-arrow-color': 'black',
        'source-arrow-color': 'black'
      })
      .selector('.faded')
      .css({
        'opacity': 0.25,
        'text-opacity': 0
      }),

    elements: {
      nodes: [__NODE_ENTRIES__],
      edges: [__EDGE_ENTRIES__]
    },

    layout: {
      name: '__LAYOUT__',
      padding: 10
    }
  });

  cy.on('tap', 'node', function(){
    if(this.data('href').length > 0) {
      window.open(this.data('href'));
    }
  });

}); // on dom ready
</script>"""

def network_css(stand_alone: bool) -> str:
    return STANDALONE_CSS if stand_alone else EMBEDDED_CSS

def network_script(node_entries: str, edge_entries: str, layout: str) -> str:
    # layout goes through as-is; an unknown name is cytoscape's error at view time
    # entries are spliced in, never scanned, so placeholder-like cell text survives
    script = MAIN_SCRIPT.replace("__LAYOUT__", layout)
    head, _, rest = script.partition("__NODE_ENTRIES__")
    middle, _, tail = rest.partition("__EDGE_ENTRIES__")
    return head + node_entries + middle + edge_entries + tail

def page_header(title: str, settings: Settings) -> str:
    parts: List[str] = []
    parts.append("<!DOCTYPE html>\n")
    parts.append("<html>\n")
    parts.append("<head>\n")
    parts.append("<meta name='description' content='[An example of getting started with Cytoscape.js]' />\n")
    parts.append(f"<script src='{html.escape(settings.jquery_url)}'></script>\n")
    parts.append(f"<script src='{html.escape(settings.cytoscape_url)}'></script>\n")
    parts.append("<meta charset='utf-8' />\n")
    parts.append(f"<title>{html.escape(title)}</title>\n")
    return "".join(parts)

def render_document(
    node_entries: str,
    edge_entries: str,
    stand_alone: bool = False,
    layout: str = "cose",
    *,
    title: Optional[str] = None,
    settings: Optional[Settings] = None,
) -> str:
    """
    Cytoscape.js page for already serialized element lists.

    stand_alone=True gives a full HTML document sized to its window; otherwise
    a fragment (style + script, fixed 600x600 box) to embed in an existing page
    that already loads jQuery and Cytoscape.js and has a `#cy` container.
    Both modes carry the same script.
    """
    settings = settings or get_settings()
    css = network_css(stand_alone)
    script = network_script(node_entries, edge_entries, layout)

    if not stand_alone:
        return css + script

    parts: List[str] = []
    parts.append(page_header(title or settings.document_title, settings))
    parts.append(css)
    parts.append(script)
    parts.append("</head><body><div id='cy'></div>")
    parts.append("</body></html>\n")
    return "".join(parts)

def render_network(
    node_table: Table,
    edge_table: Table,
    *,
    style: Optional[NetworkStyle] = None,
    layout: Optional[str] = None,
    stand_alone: bool = True,
    title: Optional[str] = None,
    escape: Optional[bool] = None,
    settings: Optional[Settings] = None,
) -> str:
    """Tables straight to HTML. Raises EmptyNetworkError when there is nothing to draw."""
    settings = settings or get_settings()
    result = build_network(
        node_table,
        edge_table,
        style,
        settings.escape_values if escape is None else escape,
    )
    if isinstance(result, EmptyNetwork):
        raise EmptyNetworkError(result)
    layout = layout or settings.default_layout
    LOGGER.debug("rendering %s document, layout=%s", "standalone" if stand_alone else "embedded", layout)
    return render_document(
        result.nodes,
        result.edges,
        stand_alone,
        layout,
        title=title,
        settings=settings,
    )
