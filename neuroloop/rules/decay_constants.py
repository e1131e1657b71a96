"""
Decay & dynamics constants.
All thresholds and rates for decay, recovery and training capacity live here.
"""

# ==========================================
# SKILL INACTIVITY DECAY (AE, RA, CT, IN)
# ==========================================
SKILL_DECAY_THRESHOLD_DAYS = 30     # days of no XP before decay begins
SKILL_DECAY_INTERVAL_DAYS = 15      # further step every N days past threshold
SKILL_DECAY_BASE_POINTS = 1
SKILL_DECAY_INTERVAL_POINTS = 1
SKILL_DECAY_MAX_POINTS = 3          # per 90-day window

# ==========================================
# READINESS DECAY
# ==========================================
LOW_RECOVERY_THRESHOLD = 40
READINESS_DECAY_TRIGGER_DAYS = 3
READINESS_DECAY_INITIAL_POINTS = 5
READINESS_DECAY_PER_DAY_POINTS = 2
READINESS_DECAY_MAX_WEEKLY = 15

# ==========================================
# SCI DECAY
# ==========================================
SCI_LOW_RECOVERY_DECAY = 5
SCI_NO_TRAINING_THRESHOLD_DAYS = 7
SCI_NO_TRAINING_DECAY = 5
SCI_DECAY_MAX_WEEKLY = 10           # both penalties stacked

# ==========================================
# DUAL-PROCESS BALANCE DECAY
# ==========================================
DUAL_PROCESS_IMBALANCE_RATIO = 2    # S1/S2 >= 2 or <= 0.5
DUAL_PROCESS_IMBALANCE_DECAY = 5
DUAL_PROCESS_DECAY_MAX_WEEKLY = 10

# ==========================================
# COGNITIVE AGE REGRESSION
# ==========================================
COGNITIVE_AGE_PERFORMANCE_DROP_THRESHOLD = 10
COGNITIVE_AGE_DROP_DAYS_THRESHOLD = 21
COGNITIVE_AGE_MAX_INCREASE_PER_MONTH = 1
COGNITIVE_AGE_TRACKING_PERIOD_DAYS = 30
COGNITIVE_AGE_MAX_OFFSET_YEARS = 15
REGRESSION_RISK_MEDIUM_DAYS = 10

# ==========================================
# RECOVERY
# ==========================================
REC_TARGET = 840                    # minutes per rolling week (2h/day)
REC_WALK_WEIGHT = 0.5

# Continuous recovery model
REC_HALF_LIFE_HOURS = 72
REC_GAIN_COEFFICIENT = 0.12
NIGHT_START_HOUR = 23
NIGHT_END_HOUR = 7
NIGHT_DECAY_MULTIPLIER = 0.2

# Recovery Readiness Init (onboarding estimate)
RRI_BASE = 35
RRI_MIN = 35
RRI_MAX = 55
RRI_VALIDITY_HOURS = 72

# ==========================================
# TRAINING CAPACITY (TC)
# ==========================================
TC_FLOOR = 30
TC_INITIAL_PLAN_SHARE = 0.6
TC_GROWTH_ALPHA = 0.06
TC_DECAY_PER_WEEK = 3
TC_INACTIVITY_THRESHOLD_DAYS = 7
TC_OPTIMAL_MIN_PERCENT = 0.60
TC_OPTIMAL_MAX_PERCENT = 0.85
TC_OPTIMAL_MIN_OF_MAX = 0.70
TC_UPGRADE_HINT_THRESHOLD = 0.90

TC_PLAN_CAPS = {
    "light": 100,
    "expert": 160,
    "superhuman": 220,
}
