"""発射軌道の比較 - 形状ごとの飛行経路と姿勢角をプロット"""

import sys
from pathlib import Path

import matplotlib.pyplot as plt
import numpy as np

# プロジェクトルートをパスに追加
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root / "src"))

from aerotunnel import config
from aerotunnel.entities.shape import LaunchPhase, ShapeKind
from aerotunnel.tunnel import FlowField

COLORS = {
    ShapeKind.LOW_DRAG: "#FF6B6B",
    ShapeKind.LIFT_GENERATING: "#6BCB77",
    ShapeKind.HIGH_DRAG: "#A66CFF",
}


def record_flight(kind: ShapeKind, wind_intensity: float, seed: int = 0):
    """
    1回の発射を最後まで進めて記録

    Returns:
        (xs, ys, angles, phases) の配列
    """
    field = FlowField(kind, wind_intensity=wind_intensity, seed=seed)
    shape = field.shape
    field.launch()

    xs, ys, angles, phases = [], [], [], []
    while shape.advance_launch(field.wind_intensity):
        xs.append(shape.x)
        ys.append(shape.y)
        angles.append(shape.angle)
        phases.append(shape.launch_phase)
    return np.array(xs), np.array(ys), np.array(angles), phases


def plot_trajectories(wind_intensity: float = 5.0):
    fig, axes = plt.subplots(2, 1, figsize=(12, 9))

    for kind in ShapeKind:
        xs, ys, angles, phases = record_flight(kind, wind_intensity)
        flying = np.array([p == LaunchPhase.FLYING for p in phases])
        color = COLORS[kind]

        # 上段: 飛行経路（画面座標なのでy軸を反転）
        axes[0].plot(xs[flying], ys[flying], '-', color=color, label=f'{kind.value} (flying)')
        axes[0].plot(xs[~flying], ys[~flying], ':', color=color, alpha=0.6,
                     label=f'{kind.value} (returning)')

        # 下段: 姿勢角
        axes[1].plot(np.degrees(angles), color=color, label=f'{kind.value}: {len(phases)} steps')

    axes[0].axhline(config.LAUNCH_CEILING, color='k', linestyle='--', alpha=0.3)
    axes[0].axhline(config.TUNNEL_HEIGHT - config.LAUNCH_CEILING, color='k', linestyle='--', alpha=0.3)
    axes[0].axvline(config.TUNNEL_WIDTH + config.LAUNCH_EXIT_MARGIN, color='r', linestyle=':', alpha=0.4,
                    label='Exit')
    axes[0].invert_yaxis()
    axes[0].set_xlabel('x [px]')
    axes[0].set_ylabel('y [px]')
    axes[0].set_title(f'Launch trajectories (wind={wind_intensity:.0f})')
    axes[0].legend(fontsize=8)
    axes[0].grid(alpha=0.3)

    axes[1].set_xlabel('Step')
    axes[1].set_ylabel('Angle [deg]')
    axes[1].set_title('Orientation during launch')
    axes[1].legend()
    axes[1].grid(alpha=0.3)

    plt.tight_layout()
    plt.savefig('launch_trajectories.png', dpi=150)
    print("Plot saved to launch_trajectories.png")


if __name__ == "__main__":
    wind = float(sys.argv[1]) if len(sys.argv) > 1 else 5.0
    plot_trajectories(wind)
    plt.show()
