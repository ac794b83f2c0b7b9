import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, File, Form, Header, HTTPException, Query, Request, UploadFile
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import HTMLResponse, JSONResponse, Response

from cache import get_cache, key_for
from config import get_settings
from document import render_network
from elements import build_network
from example import example_tables
from models import EmptyNetwork, EmptyNetworkError, NetworkPayload, NetworkRequest, NetworkStyle
from table import Table
from utils import compute_etag, etag_matches, html_headers

settings = get_settings()

logging.basicConfig(
    level=getattr(logging, settings.log_level.upper(), logging.INFO),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
LOGGER = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    app.state.cache = get_cache(settings)
    await app.state.cache.start()
    LOGGER.info("startup env=%s layout=%s", settings.app_env, settings.default_layout)
    try:
        yield
    finally:
        await app.state.cache.close()


app = FastAPI(title="cytoscape-network", version="1.0.0", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=[o.strip() for o in settings.cors_allow_origins.split(",") if o.strip()],
    allow_credentials=settings.cors_allow_credentials,
    allow_headers=[h.strip() for h in settings.cors_allow_headers.split(",") if h.strip()],
    allow_methods=[m.strip() for m in settings.cors_allow_methods.split(",") if m.strip()],
)


@app.exception_handler(EmptyNetworkError)
async def empty_network_handler(request: Request, exc: EmptyNetworkError):
    return JSONResponse(
        status_code=422,
        content={"reason": exc.result.reason.value, "detail": exc.result.detail},
    )


def html_reply(html: str, if_none_match: Optional[str]) -> Response:
    etag = compute_etag(html.encode("utf-8"))
    headers = html_headers(settings.cache_api_ttl, etag)
    if etag_matches(if_none_match, etag):
        return Response(status_code=304, headers=headers)
    return HTMLResponse(html, status_code=200, headers=headers)


async def cached_render(key: str, node_table: Table, edge_table: Table, **kwargs) -> str:
    cache = app.state.cache
    html = await cache.get(key)
    if html is not None:
        LOGGER.debug("document cache hit %s", key)
        return html
    html = render_network(node_table, edge_table, settings=settings, **kwargs)
    await cache.set(key, html, ttl=settings.cache_api_ttl)
    return html


@app.get("/health", tags=["meta"])
async def health():
    return {"status": "ok", "env": settings.app_env}


@app.post("/v1/network", response_model=NetworkPayload, tags=["network"])
async def network_payload(body: NetworkRequest):
    result = build_network(
        Table.from_records(body.nodes),
        Table.from_records(body.edges),
        body.style,
        settings.escape_values,
    )
    if isinstance(result, EmptyNetwork):
        raise EmptyNetworkError(result)
    return result


@app.post("/v1/network/html", response_class=HTMLResponse, tags=["viz"])
async def network_html(
    body: NetworkRequest,
    if_none_match: Optional[str] = Header(default=None),
):
    key = key_for("html", body.model_dump(mode="json"))
    html = await cached_render(
        key,
        Table.from_records(body.nodes),
        Table.from_records(body.edges),
        style=body.style,
        layout=body.layout,
        stand_alone=body.stand_alone,
        title=body.title,
    )
    return html_reply(html, if_none_match)


async def read_csv_upload(upload: UploadFile, label: str) -> Table:
    raw = await upload.read(settings.max_upload_bytes + 1)
    if len(raw) > settings.max_upload_bytes:
        raise HTTPException(status_code=413, detail=f"{label} file larger than {settings.max_upload_bytes} bytes")
    try:
        text = raw.decode("utf-8-sig")
    except UnicodeDecodeError as e:
        raise HTTPException(status_code=400, detail=f"{label} file is not utf-8: {e}") from e
    try:
        return Table.from_csv(text)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=f"{label} file: {e}") from e


@app.post("/v1/network/csv", response_class=HTMLResponse, tags=["viz"])
async def network_csv(
    nodes: UploadFile = File(...),
    edges: UploadFile = File(...),
    layout: Optional[str] = Form(default=None),
    stand_alone: bool = Form(default=True),
    title: Optional[str] = Form(default=None),
    node_color: str = Form(default="#888888"),
    node_shape: str = Form(default="ellipse"),
    edge_color: str = Form(default="#888888"),
    edge_source_shape: str = Form(default="none"),
    edge_target_shape: str = Form(default="triangle"),
    node_href: str = Form(default=""),
    if_none_match: Optional[str] = Header(default=None),
):
    node_table = await read_csv_upload(nodes, "nodes")
    edge_table = await read_csv_upload(edges, "edges")
    style = NetworkStyle(
        node_color=node_color,
        node_shape=node_shape,
        edge_color=edge_color,
        edge_source_shape=edge_source_shape,
        edge_target_shape=edge_target_shape,
        node_href=node_href,
    )
    html = render_network(
        node_table,
        edge_table,
        style=style,
        layout=layout,
        stand_alone=stand_alone,
        title=title,
        settings=settings,
    )
    return html_reply(html, if_none_match)


@app.get("/v1/network/example", response_class=HTMLResponse, tags=["viz"])
async def network_example(
    layout: Optional[str] = Query(default=None),
    stand_alone: bool = Query(default=True),
    if_none_match: Optional[str] = Header(default=None),
):
    node_table, edge_table = example_tables()
    key = key_for("example", {"layout": layout, "stand_alone": stand_alone})
    html = await cached_render(key, node_table, edge_table, layout=layout, stand_alone=stand_alone)
    return html_reply(html, if_none_match)
