"""Click CLI commands for TerrainBuilder."""

import logging

import click
import numpy as np

from .builder import TerrainBuilder
from .errors import TerrainBuilderError
from .heightmap import HeightGrid
from .mesh import TerrainMesh
from .models import TerrainSettings

logger = logging.getLogger(__name__)

EDIT_OPS = ('add', 'subtract', 'flatten', 'smooth', 'stamp', 'stamp-3d', 'unstamp-3d')
HEIGHTMAP_OPS = ('stamp', 'stamp-3d', 'unstamp-3d')


@click.group()
@click.option('--verbose', '-v', is_flag=True, help='Enable debug logging')
def cli(verbose: bool):
    """TerrainBuilder CLI for building and sculpting terrain meshes."""
    logging.basicConfig(level=logging.DEBUG if verbose else logging.INFO,
                        format="%(levelname)s %(name)s: %(message)s")


@cli.command()
@click.argument('image', type=click.Path(exists=True, dir_okay=False))
@click.option('--output', '-o', default='terrain.glb', help='Output mesh file path')
@click.option('--max-height', '-m', default=1.0, help='Height of a white pixel')
@click.option('--world-size', '-w', default=None, type=float,
              help='Terrain extent in world units')
def heightmap(image: str, output: str, max_height: float, world_size: float):
    """Build a grid terrain from a grayscale heightmap image."""
    try:
        settings = (TerrainSettings(world_size=world_size) if world_size is not None
                    else TerrainSettings())
        grid = HeightGrid.from_image(image)
        terrain = TerrainBuilder(settings).create_terrain_from_heightmap(grid, max_height)
        path = terrain.export(output)
    except (TerrainBuilderError, ValueError, OSError) as e:
        logger.error(f"Error building terrain: {e}")
        raise click.ClickException(str(e))
    click.echo(f"Wrote {len(terrain.points)} vertices to {path}")


@cli.command()
@click.argument('points_file', type=click.Path(exists=True, dir_okay=False))
@click.option('--output', '-o', default='mesh.glb', help='Output mesh file path')
@click.option('--delimiter', '-d', default=None,
              help="Column delimiter (default: whitespace; use ',' for CSV)")
def points(points_file: str, output: str, delimiter: str):
    """Fan-triangulate an ordered x y z point list into a mesh."""
    try:
        pts = np.loadtxt(points_file, delimiter=delimiter, ndmin=2)
        mesh = TerrainBuilder().create_mesh(pts[:, :3])
        path = mesh.export(output)
    except (TerrainBuilderError, ValueError, OSError) as e:
        logger.error(f"Error building mesh: {e}")
        raise click.ClickException(str(e))
    click.echo(f"Wrote {len(mesh.points)} vertices to {path}")


@cli.command()
@click.argument('input_path', type=click.Path(exists=True, dir_okay=False))
@click.option('--output', '-o', required=True, help='Output mesh file path')
@click.option('--op', type=click.Choice(EDIT_OPS), required=True, help='Edit operation')
@click.option('--at', 'center', nargs=3, type=float, required=True,
              help='Edit center X Y Z')
@click.option('--range', 'range_', default=1.0, help='Edit radius')
@click.option('--falloff', '-f', default=1.0, help='Falloff factor')
@click.option('--height', default=1.0, help='Height for add/subtract/flatten')
@click.option('--heightmap', 'heightmap_path', type=click.Path(exists=True, dir_okay=False),
              help='Stamp image for stamp operations')
@click.option('--max-height', '-m', default=1.0, help='Stamp height of a white pixel')
def edit(input_path: str, output: str, op: str, center, range_: float,
         falloff: float, height: float, heightmap_path: str, max_height: float):
    """Apply one falloff-weighted edit around a point and save the result."""
    if op in HEIGHTMAP_OPS and not heightmap_path:
        raise click.UsageError(f"--heightmap is required for --op {op}")

    try:
        terrain = TerrainMesh.load(input_path)
        editor = terrain.editor
        if op == 'add':
            count = editor.add_height(center, range_, falloff, height)
        elif op == 'subtract':
            count = editor.subtract_height(center, range_, falloff, height)
        elif op == 'flatten':
            count = editor.flatten(center, range_, falloff, height)
        elif op == 'smooth':
            count = editor.smooth_range(center, range_, falloff)
        else:
            stamp = HeightGrid.from_image(heightmap_path)
            if op == 'stamp':
                count = editor.stamp_heightmap(center, range_, falloff, stamp, max_height)
            elif op == 'stamp-3d':
                count = editor.add_heightmap_3d(center, range_, falloff, stamp, max_height)
            else:
                count = editor.subtract_heightmap_3d(center, range_, falloff, stamp, max_height)
        path = terrain.export(output)
    except (TerrainBuilderError, ValueError, OSError) as e:
        logger.error(f"Error editing mesh: {e}")
        raise click.ClickException(str(e))
    click.echo(f"{op}: edited {count} points, wrote {path}")


@cli.command()
@click.argument('input_path', type=click.Path(exists=True, dir_okay=False))
@click.option('--output', '-o', required=True, help='Output mesh file path')
@click.option('--iterations', '-n', default=1, help='Smoothing passes')
def smooth(input_path: str, output: str, iterations: int):
    """Smooth every point toward its neighbourhood average height."""
    try:
        terrain = TerrainMesh.load(input_path)
        terrain.editor.smooth(iterations)
        path = terrain.export(output)
    except (TerrainBuilderError, ValueError, OSError) as e:
        logger.error(f"Error smoothing mesh: {e}")
        raise click.ClickException(str(e))
    click.echo(f"Smoothed {len(terrain.points)} points x{iterations}, wrote {path}")
