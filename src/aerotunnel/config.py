"""AeroTunnel 設定・定数"""

# 画面設定
SCREEN_WIDTH = 1280
SCREEN_HEIGHT = 760
FPS = 60

# 時間刻み (秒)。シミュレーション時間は可視フレームでのみ進む
DT = 1.0 / FPS

# トンネル（1パネル）の既定サイズ (px)
TUNNEL_WIDTH = 500
TUNNEL_HEIGHT = 340
DISPLAY_SCALE = 1.0  # 描画専用の倍率（シミュレーション座標には影響しない）

# 風速
WIND_MIN = 1
WIND_MAX = 10
WIND_DEFAULT = 10

# パーティクルプール（風速に応じて線形補間）
BASE_PARTICLES = 300   # 風速0相当の基本数
EXTRA_PARTICLES = 400  # 風速10で追加される数（合計700）

# 流線パーティクル
WALL_MARGIN = 15        # px (壁からの最小距離、ここでクランプ)
SPAWN_MARGIN = 18       # px (出現行の上下余白)
EXIT_OVERSHOOT = 20     # px (左端をこれだけ越えたら再利用)
SPAWN_JITTER = 40       # px (再出現時の右端からのばらつき)
INITIAL_SPAWN_JITTER = 60  # px (生成直後の右端からのばらつき)
PARTICLE_SPEED_RANGE = (0.3, 0.75)     # 速度係数（生成時に固定）
PARTICLE_OPACITY_RANGE = (0.3, 0.8)
PARTICLE_THICKNESS_RANGE = (1.0, 3.2)  # px
TRAIL_LENGTH_RANGE = (35, 60)          # 軌跡サンプル数 [min, max)
WIND_SPEED_DIVISOR = 3.0               # spd = speed * wind / 3

# 流線の色 (RGB)
COLOR_STREAM_DEFAULT = (120, 180, 255)   # 淡い青（非干渉）
COLOR_STREAM_INTERACT = (100, 210, 255)  # 干渉中の寒色
COLOR_STREAM_LIFT = (50, 235, 100)       # 揚力（翼下面）
COLOR_STREAM_LIFT_TRAIL = (80, 225, 120) # 揚力（後縁）
COLOR_STREAM_HOT = (255, 100, 60)        # 前面のせき止め
COLOR_STREAM_WAKE = (255, 140, 80)       # 後流の乱れ

# 偏向ゾーン（形状の半幅 pw・半高 ph に対する係数）
ZONE_APPROACH_FRONT = 0.7   # relX < pw * 0.7
ZONE_APPROACH_BACK = 0.2    # relX > -pw * 0.2
ZONE_NEAR_BODY = 0.8        # |relY| < ph * 0.8

LOW_DRAG_RADIUS = 0.5       # r = pw * 0.5
LOW_DRAG_PUSH = 4.0
LOW_DRAG_DAMPING = 0.75     # ゾーン内の流速減衰
LOW_DRAG_RECOVERY = 1.1     # 後方での流速回復

LIFT_SPAN = 0.8             # 翼幅 = ph * 0.8
LIFT_NEAR_WINGS = 0.6       # |relX| < pw * 0.6
LIFT_RADIUS = 0.6           # r = max(pw, ph) * 0.6
LIFT_PUSH = 4.5
LIFT_BELOW_GAIN = 1.5       # 翼下面は強く上向き
LIFT_ABOVE_GAIN = 0.6       # 翼上面は弱く逆向き
LIFT_DAMPING = 0.7
LIFT_TRAILING_EDGE = 0.15   # relX < -pw * 0.15
LIFT_TRAILING_BIAS = 0.35

HIGH_DRAG_RADIUS = 0.75     # r = max(pw, ph) * 0.75
HIGH_DRAG_FRONT = 0.7       # relX < pw * 0.7
HIGH_DRAG_BACK = 0.3        # relX > -pw * 0.3
HIGH_DRAG_FRONT_DAMPING = 0.1
HIGH_DRAG_SCATTER = 6.0
HIGH_DRAG_WAKE_DAMPING = 0.4
WAKE_FREQUENCY = 12.5       # rad/s (約 80ms 周期の揺れ)
WAKE_ROW_PHASE = 0.1        # 行ごとの位相ずれ
WAKE_AMPLITUDE = 3.5
WAKE_NOISE = 5.0
WAKE_WIND_REFERENCE = 5.0

# 紙飛行機の形状 (px、描画倍率前)
SHAPE_SCALE = 2.2
SHAPE_SIZES = {
    "dart": (90, 28),
    "glider": (55, 110),
    "tumbler": (55, 65),
}
HOME_X_FRACTION = 0.45
HOME_Y_FRACTION = 0.5

# アイドル揺動
REACT_TIME_SCALE = 2.5      # s (揺動の時間スケール)

# 発射アニメーション（1ステップ = 1フレーム、速度は px/step）
LAUNCH_EXIT_MARGIN = 120    # px (右端をこれだけ越えたら帰還開始)
LAUNCH_CEILING = 30         # px (上下の跳ね返り境界)
LAUNCH_BOUNCE = 0.5         # 跳ね返り時の速度減衰
LAUNCH_WIND_PUSH = 0.01     # px/step² per wind (前進方向への風の押し)
RETURN_STEPS = 90           # 帰還にかけるステップ数
RETURN_OVERSHOOT = 0.15     # 帰還時の行き過ぎ振幅
RETURN_OSCILLATIONS = 3.0   # 行き過ぎの半周期数
RETURN_ANGLE_DECAY = 0.9

# 形状ごとの発射プロファイル
LAUNCH_PROFILES = {
    "dart": {
        "initial_velocity": (9.0, -0.6),
        "drag": 0.0004,            # 二乗抵抗係数
        "gravity": 0.004,
        "vertical_damping": 1.0,
        "min_forward_speed": 4.0,
    },
    "glider": {
        "initial_velocity": (6.0, -4.5),
        "drag": 0.0015,
        "gravity": 0.1,
        "vertical_damping": 0.999,  # 縦方向の減衰がほぼ無い → 放物線
        "min_forward_speed": 2.5,
    },
    "tumbler": {
        "initial_velocity": (10.0, 0.0),
        "drag": 0.012,
        "gravity": 0.01,
        "vertical_damping": 0.98,
        "min_forward_speed": 3.0,
    },
}

# 姿勢制御
DART_ANGLE_GAIN = 0.5        # 目標角 = 経路角 * 0.5
DART_ANGLE_RELAX = 0.3       # 速やかに安定
GLIDER_ANGLE_LIMIT = 0.6     # rad
GLIDER_ANGLE_RELAX = 0.15
TUMBLER_ANGULAR_KICK = 0.04  # rad/step (風速5基準)
TUMBLER_ANGULAR_DECAY = 0.92
TUMBLER_ANGLE_DECAY = 0.97

# カラー定義（描画）
COLOR_BG_CENTER = (20, 37, 58)
COLOR_BG_EDGE = (10, 21, 32)
COLOR_WALL_LIGHT = (58, 74, 90)
COLOR_WALL_DARK = (42, 56, 68)
COLOR_HOVER_GLOW = (255, 215, 0)
COLOR_PANEL_BORDER = (60, 70, 80)
COLOR_LABEL = (220, 230, 240)
WALL_HEIGHT_PX = 12
WALL_GRID_SPACING = 40

# UI
SLIDER_HEIGHT = 24
BUTTON_WIDTH = 110
BUTTON_HEIGHT = 32
PANEL_GAP = 20
CONTROL_BAR_HEIGHT = 48
SCROLL_STEP = 40

# 外部信号
RESIZE_DEBOUNCE_SEC = 0.15
VISIBILITY_THRESHOLD = 0.05  # 交差率がこれ以上で可視

# 形状種別の表示名
SHAPE_LABELS = {
    "dart": "ダート（低抵抗）",
    "glider": "グライダー（揚力）",
    "tumbler": "タンブラー（高抵抗）",
}
