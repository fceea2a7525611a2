#!/usr/bin/env python3
"""発射状態ロギングスクリプト（全形状・全風速の所要ステップ解析用）"""

import sys
from pathlib import Path

import pandas as pd

# プロジェクトルートをパスに追加
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root / "src"))

from aerotunnel.entities.shape import ShapeKind
from aerotunnel.tunnel import FlowField


def run_launches(output_csv: str = "launch_log.csv", max_steps: int = 2000) -> pd.DataFrame:
    """
    各形状 × 風速1〜10で発射し、ステップごとの状態をCSVに記録

    Args:
        output_csv: 出力CSVファイル名
        max_steps: 1回の発射で記録する最大ステップ数
    """
    rows = []
    for kind in ShapeKind:
        for wind in range(1, 11):
            field = FlowField(kind, wind_intensity=wind, seed=wind)
            shape = field.shape
            field.launch()

            for step in range(max_steps):
                animating = shape.advance_launch(field.wind_intensity)
                rows.append({
                    'kind': kind.value,
                    'wind': wind,
                    'step': step,
                    'phase': shape.launch_phase.name,
                    'x': shape.x,
                    'y': shape.y,
                    'vx': shape.velocity[0],
                    'vy': shape.velocity[1],
                    'angle': shape.angle,
                })
                if not animating:
                    break

    df = pd.DataFrame(rows)
    csv_path = project_root / output_csv
    df.to_csv(csv_path, index=False)
    print(f"Logged {len(df)} rows to {csv_path}")
    return df


def summarize(df: pd.DataFrame):
    """形状・風速ごとの所要ステップと飛行ステップ"""
    total = df.groupby(['kind', 'wind'])['step'].max() + 1
    flying = df[df['phase'] == 'FLYING'].groupby(['kind', 'wind'])['step'].count()
    summary = pd.DataFrame({'total_steps': total, 'flying_steps': flying})
    print("\n発射の所要ステップ:")
    print(summary.to_string())
    print("\n形状ごとの最大ステップ:")
    print(summary.groupby(level='kind')['total_steps'].max().to_string())


if __name__ == "__main__":
    summarize(run_launches())
