from __future__ import annotations

import argparse
import random

from hexterrain.app import run_app
from hexterrain.config import (
    APP_VERSION,
    CHUNK_SIZE,
    DEFAULT_GIZMOS,
    DEFAULT_SEAMS,
    DEFAULT_SEED,
    DEFAULT_SKIP_FLAT_QUADS,
    MAP_SIZE,
    NOISE_SCALE,
    OUTER_RADIUS,
    WIREFRAME,
)
from hexterrain.world.world import WorldParams, build_map

def _parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(prog="hexterrain", description=f"Procedural hex-tile terrain (ModernGL + pygame) v{APP_VERSION}")
    p.add_argument("--seed", default=str(DEFAULT_SEED), help=f"int seed or 'random' (default: {DEFAULT_SEED})")
    p.add_argument("--map-size", type=int, default=MAP_SIZE, help=f"chunks per map side (default: {MAP_SIZE})")
    p.add_argument("--chunk-size", type=int, default=CHUNK_SIZE, help=f"tiles per chunk side, even when map-size > 1 (default: {CHUNK_SIZE})")
    p.add_argument("--outer-radius", type=float, default=OUTER_RADIUS, help="hex center to corner distance")
    p.add_argument("--noise-scale", type=float, default=NOISE_SCALE, help="tile coordinates per noise unit")
    p.add_argument("--wireframe", dest="wireframe", action="store_true", default=WIREFRAME, help="draw wireframe overlay (default on)")
    p.add_argument("--no-wireframe", dest="wireframe", action="store_false", help="no wireframe overlay")
    p.add_argument("--gizmos", dest="gizmos", action="store_true", default=DEFAULT_GIZMOS, help="draw axis/corner gizmos (default on)")
    p.add_argument("--no-gizmos", dest="gizmos", action="store_false", help="hide axis/corner gizmos")
    p.add_argument("--seams", dest="seams", action="store_true", default=DEFAULT_SEAMS, help="stitch skirts across chunk borders (default on)")
    p.add_argument("--no-seams", dest="seams", action="store_false", help="leave chunk borders unstitched")
    p.add_argument(
        "--skip-flat-quads",
        action="store_true",
        default=DEFAULT_SKIP_FLAT_QUADS,
        help="drop skirts between tiles of equal height",
    )
    p.add_argument("--workers", type=int, default=0, help="chunk builder threads (0 = build on main thread)")
    p.add_argument("--debug", action="store_true", help="print build timings and GL info")
    p.add_argument("--headless", action="store_true", help="build the map, print a summary and exit (no window)")
    return p.parse_args(argv)

def _resolve_seed(raw: str) -> int:
    if isinstance(raw, str) and raw.lower() == "random":
        return random.randint(0, 2**31 - 1)
    return int(raw)

def _print_summary(chunks, params: WorldParams) -> None:
    print(f"hexterrain v{APP_VERSION} seed={params.seed} map={params.map_size}x{params.map_size} chunk={params.chunk_size}")
    total_v = 0
    total_t = 0
    for origin, mesh in chunks:
        print(
            f"  chunk ({mesh.cx},{mesh.cz}) origin=({origin[0]:.3f}, {origin[1]:.3f}, {origin[2]:.3f}) "
            f"verts={mesh.vertex_count} tris={mesh.triangle_count}"
        )
        total_v += mesh.vertex_count
        total_t += mesh.triangle_count
    print(f"total chunks={len(chunks)} verts={total_v} tris={total_t}")

def main(argv: list[str] | None = None) -> None:
    args = _parse_args(argv)

    try:
        seed = _resolve_seed(args.seed)
        params = WorldParams(
            map_size=int(args.map_size),
            chunk_size=int(args.chunk_size),
            outer_radius=float(args.outer_radius),
            seams=bool(args.seams),
            skip_flat_quads=bool(args.skip_flat_quads),
            noise_scale=float(args.noise_scale),
            seed=seed,
        )
    except ValueError as e:
        raise SystemExit(f"hexterrain: {e}")

    if args.headless:
        chunks = build_map(params, params.height_field(), workers=int(args.workers), debug=bool(args.debug))
        _print_summary(chunks, params)
        return

    run_app(
        params=params,
        wireframe=bool(args.wireframe),
        gizmos=bool(args.gizmos),
        workers=int(args.workers),
        debug=bool(args.debug),
    )
