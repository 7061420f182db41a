from .ambush import AmbushPlan, Terrain, ambush_chance_for, ambush_victory_gold, plan_ambush, roll_for_ambush

__all__ = ["AmbushPlan", "Terrain", "ambush_chance_for", "ambush_victory_gold", "plan_ambush", "roll_for_ambush"]
