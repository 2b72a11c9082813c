"""
Orbit Visualizer Demonstration

This script demonstrates the key capabilities of the orbit visualizer core:
- Building and validating orbital elements
- Satellite position and perigee/apogee distances
- Reference directions (line of nodes, perigee, orbit normal)
- Singularity flags for circular and equatorial orbits
- Optional 3D plot of the scene geometry

Usage:
    python demo.py [--a A] [--e E] [--i DEG] [--omega DEG] [--raan DEG] [--nu DEG]
                   [--plot] [--explain KEY] [--verbose]

Arguments:
    --plot: Draw the scene with matplotlib
    --explain: Ask the AI explanation service about one element (needs GEMINI_API_KEY)
    --verbose: Enable debug logging
"""

import argparse
import logging

import numpy as np

from logging_config import configure_logging, get_logger
from orbit_visualizer.descriptions import PARAMETERS, subtitle
from orbit_visualizer.elements import DEFAULT_ELEMENTS, OrbitalElements, ParameterKey
from orbit_visualizer.geometry import (
    ascending_node_direction,
    orbit_normal,
    perigee_direction,
    position,
)
from orbit_visualizer.guides import SceneGeometry, apsides
from orbit_visualizer.session import ExplorerSession

logger = get_logger(__name__)


def demonstrate_geometry(elements: OrbitalElements) -> None:
    """
    Log positions and reference directions for a set of elements.

    Parameters
    ----------
    elements : OrbitalElements
        Elements to evaluate
    """
    degrees = elements.as_degrees()
    logger.info(
        f"Elements: a={degrees['a']:.2f} e={degrees['e']:.3f} i={degrees['i']:.1f}° "
        f"ω={degrees['omega']:.1f}° Ω={degrees['raan']:.1f}° ν={degrees['nu']:.1f}°"
    )
    for key in ParameterKey:
        logger.info(f"  {PARAMETERS[key].name}: {subtitle(key, elements)}")

    perigee, apogee = apsides(elements)
    sat = position(elements)
    logger.info(f"Perigee distance: {np.linalg.norm(perigee):.3f} DU")
    logger.info(f"Apogee distance: {np.linalg.norm(apogee):.3f} DU")
    logger.info(f"Satellite position: [{sat[0]:.3f}, {sat[1]:.3f}, {sat[2]:.3f}] "
                f"(r = {np.linalg.norm(sat):.3f} DU)")

    for label, vec in (
        ("Ascending node", ascending_node_direction(elements)),
        ("Perigee", perigee_direction(elements)),
        ("Orbit normal", orbit_normal(elements)),
    ):
        logger.info(f"{label} direction: [{vec[0]:.4f}, {vec[1]:.4f}, {vec[2]:.4f}]")


def demonstrate_singularities(session: ExplorerSession) -> None:
    """Walk the session through circular and equatorial geometries."""
    for key, value in ((ParameterKey.E, 0.0), (ParameterKey.I, 0.0)):
        session.update(key, value)
        flags = session.flags()
        disabled = ", ".join(sorted(k.value for k in flags.disabled_parameters)) or "none"
        logger.info(f"After {key.value} = {value}: circular={flags.circular} "
                    f"equatorial={flags.equatorial} disabled controls: {disabled}")
    session.reset()


def visualize_scene(scene: SceneGeometry) -> None:
    """
    Plot the scene geometry in 3D.

    The render frame is Y-up; matplotlib's 3D axes are Z-up, so render Y is
    plotted on the vertical axis.
    """
    import matplotlib.pyplot as plt

    def _xyz(points):
        points = np.atleast_2d(points)
        return points[:, 0], -points[:, 2], points[:, 1]

    fig = plt.figure(figsize=(10, 8))
    ax = fig.add_subplot(111, projection='3d')

    ax.plot(*_xyz(scene.orbit_path), color='#f59e0b', label='Orbit')
    ax.plot_trisurf(*_xyz(scene.surface_vertices), triangles=scene.surface_faces,
                    color='#fcd34d', alpha=0.2)

    origin = np.zeros(3)
    for vec, color, label in (
        (scene.reference_axes['vernal'], '#ef4444', 'Vernal equinox'),
        (scene.reference_axes['north'], '#3b82f6', 'North'),
        (scene.node_line, '#d946ef', 'Line of nodes'),
        (scene.perigee_line, '#e5e7eb', 'Perigee'),
        (scene.normal_line, '#22c55e', 'Orbit normal'),
    ):
        ax.plot(*_xyz(np.vstack([origin, vec])), color=color, linestyle='--', label=label)

    for arc in scene.arcs.values():
        if len(arc):
            ax.plot(*_xyz(arc), linewidth=2)

    ax.scatter(*_xyz(scene.satellite), color='#38bdf8', s=60, label='Satellite')
    ax.scatter(*_xyz(origin), color='#1d4ed8', s=200, label='Central body')

    ax.set_xlabel('X (DU)')
    ax.set_ylabel('Y (DU)')
    ax.set_zlabel('Z (DU)')
    ax.set_title('Keplerian Orbital Elements')
    ax.legend(loc='upper left', fontsize=8)
    plt.tight_layout()
    plt.show()


def main() -> None:
    """Main demonstration function."""
    parser = argparse.ArgumentParser(
        description="Orbit Visualizer Demonstration",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    defaults = DEFAULT_ELEMENTS.as_degrees()
    parser.add_argument("--a", type=float, default=defaults['a'], help="Semi-major axis (DU)")
    parser.add_argument("--e", type=float, default=defaults['e'], help="Eccentricity")
    parser.add_argument("--i", type=float, default=defaults['i'], help="Inclination (deg)")
    parser.add_argument("--omega", type=float, default=defaults['omega'],
                        help="Argument of perigee (deg)")
    parser.add_argument("--raan", type=float, default=defaults['raan'], help="RAAN (deg)")
    parser.add_argument("--nu", type=float, default=defaults['nu'], help="True anomaly (deg)")
    parser.add_argument("--plot", action="store_true", help="Plot the scene with matplotlib")
    parser.add_argument("--explain", choices=[k.value for k in ParameterKey],
                        help="Request an AI explanation for one element")
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")

    args = parser.parse_args()

    configure_logging(logging.DEBUG if args.verbose else logging.INFO)

    elements = OrbitalElements.from_degrees(
        args.a, args.e, args.i, args.omega, args.raan, args.nu
    )
    session = ExplorerSession(initial=elements)

    try:
        logger.info("=" * 60)
        logger.info("Orbit Visualizer Demonstration")
        logger.info("=" * 60)

        demonstrate_geometry(session.elements)
        demonstrate_singularities(session)

        if args.explain:
            explanation = session.request_explanation(ParameterKey(args.explain)).result()
            logger.info(f"{explanation.title}: {explanation.content}")

        if args.plot:
            visualize_scene(session.scene())
    finally:
        session.close()


if __name__ == "__main__":
    main()
