"""
Reducer - Applies actions to game state.

The reducer is the single point of state change.
All state changes must go through apply_action().

Design principles:
- Pure function: (state, action) -> new_state
- Illegal actions return the input state object unchanged
- Delegates computation to deck, stations and threats
- Re-evaluates win/loss after every state-changing transition
"""

from __future__ import annotations
from dataclasses import dataclass, field
import logging

from ..card_schema.threat_card import ThreatCard, ThreatKind
from ..card_schema.effect_dsl import RevealKind
from .action import Action, ActionType
from .deck import build_deck, draw_card, shuffle_into_deck
from .dice import RandomSource, calculate_tactical_damage
from .state import (
    GameState,
    GameStatus,
    LossReason,
    TurnPhase,
    Difficulty,
    StationId,
    StationAbility,
    DieLocation,
    INFIRMARY,
    SCANNERS,
    replace_die,
    replace_threat,
)
from .stations import (
    count_at_station,
    resolve_engineering,
    resolve_medical,
    release_from_scanners,
    resolve_science,
    place_stasis_token,
    commander_change_die,
    commander_reroll_count,
    lock_detected_threats,
    is_threat_resolved,
    resolve_threat,
    process_scanners,
    gather_crew,
    is_shield_recharge_blocked,
    is_command_disabled,
    is_damage_floor_active,
    can_assign_to_station,
    can_assign_to_threat,
)
from .threats import (
    create_active_threat,
    apply_damage,
    apply_tactical_damage,
    can_target_threat,
    activate_threats,
    check_win,
    check_crew_loss,
)

logger = logging.getLogger(__name__)

SETUP_DRAWS = 2

# Phase each action belongs to; None means any phase while playing
ACTION_PHASES: dict[ActionType, TurnPhase | None] = {
    ActionType.TICK: None,
    ActionType.START_ROLL: TurnPhase.ROLLING,
    ActionType.ROLL_COMPLETE: TurnPhase.ROLLING,
    ActionType.SELECT_DIE: TurnPhase.ASSIGNING,
    ActionType.ASSIGN_TO_STATION: TurnPhase.ASSIGNING,
    ActionType.ASSIGN_TO_THREAT: TurnPhase.ASSIGNING,
    ActionType.USE_ENGINEERING: TurnPhase.ASSIGNING,
    ActionType.USE_MEDICAL: TurnPhase.ASSIGNING,
    ActionType.USE_MEDICAL_SCANNERS: TurnPhase.ASSIGNING,
    ActionType.USE_TACTICAL: TurnPhase.ASSIGNING,
    ActionType.USE_SCIENCE_SHIELDS: TurnPhase.ASSIGNING,
    ActionType.USE_SCIENCE_STASIS: TurnPhase.ASSIGNING,
    ActionType.USE_COMMANDER_REROLL: TurnPhase.ASSIGNING,
    ActionType.USE_COMMANDER_CHANGE: TurnPhase.ASSIGNING,
    ActionType.END_ASSIGN_PHASE: TurnPhase.ASSIGNING,
    ActionType.ACKNOWLEDGE_DRAW: TurnPhase.DRAWING,
    ActionType.START_THREAT_ROLL: TurnPhase.ACTIVATING,
    ActionType.THREAT_ROLL_COMPLETE: TurnPhase.ACTIVATING,
    ActionType.ACKNOWLEDGE_ACTIVATE: TurnPhase.ACTIVATING,
    ActionType.ACKNOWLEDGE_GATHER: TurnPhase.GATHERING,
}


def make_initial_state() -> GameState:
    """The idle state shown before the first game starts."""
    return GameState()


@dataclass
class Reducer:
    """
    Reducer applies actions to game state.

    Stateless - all game state is in GameState. The random source
    supplies deck shuffles and engine-side rerolls.
    """
    rng: RandomSource = field(default_factory=RandomSource)

    def apply(self, state: GameState, action: Action) -> GameState:
        """
        Apply an action to the game state.

        Returns the new state, or the same state object if the action
        is not legal right now.
        """
        action_type = action.action_type

        if action_type == ActionType.LOAD_STATE:
            loaded = action.payload.state
            return loaded if isinstance(loaded, GameState) else state

        if action_type == ActionType.NEW_GAME:
            return self._start_new_game(action.payload.difficulty or Difficulty.NORMAL)

        handler = self._get_handler(action_type)
        if handler is None:
            return state

        if not state.is_playing:
            logger.debug("Rejected %s: game is %s", action_type.value, state.status.value)
            return state

        required_phase = ACTION_PHASES.get(action_type)
        if required_phase is not None and state.phase != required_phase:
            logger.debug(
                "Rejected %s: phase is %s, needs %s",
                action_type.value, state.phase.value, required_phase.value,
            )
            return state

        return handler(state, action)

    def _get_handler(self, action_type: ActionType):
        """Get the handler function for an action type."""
        handlers = {
            ActionType.TICK: self._handle_tick,
            ActionType.START_ROLL: self._handle_start_roll,
            ActionType.ROLL_COMPLETE: self._handle_roll_complete,
            ActionType.SELECT_DIE: self._handle_select_die,
            ActionType.ASSIGN_TO_STATION: self._handle_assign_to_station,
            ActionType.ASSIGN_TO_THREAT: self._handle_assign_to_threat,
            ActionType.USE_ENGINEERING: self._handle_use_engineering,
            ActionType.USE_MEDICAL: self._handle_use_medical,
            ActionType.USE_MEDICAL_SCANNERS: self._handle_use_medical_scanners,
            ActionType.USE_TACTICAL: self._handle_use_tactical,
            ActionType.USE_SCIENCE_SHIELDS: self._handle_use_science_shields,
            ActionType.USE_SCIENCE_STASIS: self._handle_use_science_stasis,
            ActionType.USE_COMMANDER_REROLL: self._handle_use_commander_reroll,
            ActionType.USE_COMMANDER_CHANGE: self._handle_use_commander_change,
            ActionType.END_ASSIGN_PHASE: self._handle_end_assign_phase,
            ActionType.ACKNOWLEDGE_DRAW: self._handle_acknowledge_draw,
            ActionType.START_THREAT_ROLL: self._handle_start_threat_roll,
            ActionType.THREAT_ROLL_COMPLETE: self._handle_threat_roll_complete,
            ActionType.ACKNOWLEDGE_ACTIVATE: self._handle_acknowledge_activate,
            ActionType.ACKNOWLEDGE_GATHER: self._handle_acknowledge_gather,
        }
        return handlers.get(action_type)

    # ------------------------------------------------------------------
    # Meta
    # ------------------------------------------------------------------

    def _start_new_game(self, difficulty: Difficulty) -> GameState:
        logger.info("Starting new game on %s", difficulty.value)
        state = GameState(
            status=GameStatus.PLAYING,
            phase=TurnPhase.ROLLING,
            difficulty=difficulty,
            deck=build_deck(difficulty, self.rng),
            log=("Game started. Drawing 2 initial threat cards...",),
            turn_number=1,
            setup_draws_remaining=SETUP_DRAWS,
        )
        state = self._draw_and_process(state)
        return self._commit(state._copy_with(phase=TurnPhase.DRAWING))

    def _handle_tick(self, state: GameState, action: Action) -> GameState:
        return state._copy_with(elapsed_seconds=state.elapsed_seconds + 1)

    # ------------------------------------------------------------------
    # Rolling
    # ------------------------------------------------------------------

    def _handle_start_roll(self, state: GameState, action: Action) -> GameState:
        return state._copy_with(log=(f"Turn {state.turn_number}: Rolling crew dice...",))

    def _handle_roll_complete(self, state: GameState, action: Action) -> GameState:
        faces = action.payload.faces or ()
        crew = self._apply_pool_faces(state, faces)
        crew, locked = lock_detected_threats(crew)

        state = state._copy_with(crew=crew)
        if locked:
            state = state.with_log(f"{locked} die/dice locked in Scanners (Threat Detected).")

        state = self._run_scanners(state, label_draws=True)
        return self._commit(state._copy_with(phase=TurnPhase.ASSIGNING, drawn_card=None))

    # ------------------------------------------------------------------
    # Assigning - placement
    # ------------------------------------------------------------------

    def _handle_select_die(self, state: GameState, action: Action) -> GameState:
        die_id = action.payload.die_id
        if die_id is not None and state.get_die(die_id) is None:
            return state
        return state._copy_with(selected_die_id=die_id)

    def _handle_assign_to_station(self, state: GameState, action: Action) -> GameState:
        die = state.get_die(action.payload.die_id)
        station = action.payload.station
        if die is None or station is None:
            return state
        if not can_assign_to_station(die, station, state.command_disabled):
            return state

        tactical_dice = state.tactical_dice
        if station == StationId.TACTICAL:
            tactical_dice = tactical_dice + (die.id,)

        location = DieLocation.at_station(station)
        new_state = state._copy_with(
            crew=replace_die(state.crew, die.moved_to(location)),
            tactical_dice=tactical_dice,
            selected_die_id=None,
        ).with_log(f"Assigned {die.face.value} die to {location.label()}.")
        return self._commit(new_state)

    def _handle_assign_to_threat(self, state: GameState, action: Action) -> GameState:
        die = state.get_die(action.payload.die_id)
        threat = state.get_threat(action.payload.threat_id)
        if die is None or threat is None:
            return state
        if not can_assign_to_threat(die, threat, state.phase):
            return state

        crew = replace_die(state.crew, die.moved_to(DieLocation.away_mission(threat.id)))
        threats = replace_threat(
            state.active_threats,
            threat._copy_with(away_mission=threat.away_mission + (die.id,)),
        )
        new_state = state._copy_with(
            crew=crew,
            active_threats=threats,
            selected_die_id=None,
        ).with_log(f"{die.face.value} die sent to {threat.card.name} (away mission).")
        return self._commit(self._process_resolved_threats(new_state))

    # ------------------------------------------------------------------
    # Assigning - station abilities
    # ------------------------------------------------------------------

    def _handle_use_engineering(self, state: GameState, action: Action) -> GameState:
        eng_count = count_at_station(state.crew, StationId.ENGINEERING)
        if eng_count == 0:
            return state
        hull = resolve_engineering(state.hull, state.max_hull, eng_count)
        new_state = state._copy_with(hull=hull).with_log(
            f"Engineering repaired {hull - state.hull} hull. ({hull}/{state.max_hull})"
        )
        return self._commit(new_state)

    def _handle_use_medical(self, state: GameState, action: Action) -> GameState:
        if StationAbility.MEDICAL in state.used_station_actions:
            return state
        if count_at_station(state.crew, StationId.MEDICAL) == 0:
            return state
        recovered = len(state.dice_at(INFIRMARY))
        new_state = state._copy_with(
            crew=resolve_medical(state.crew),
            used_station_actions=state.used_station_actions | {StationAbility.MEDICAL},
        ).with_log(f"Medical: {recovered} crew recovered from Infirmary.")
        return self._commit(new_state)

    def _handle_use_medical_scanners(self, state: GameState, action: Action) -> GameState:
        if StationAbility.MEDICAL in state.used_station_actions:
            return state
        if count_at_station(state.crew, StationId.MEDICAL) == 0:
            return state
        if not state.dice_at(SCANNERS):
            return state
        new_state = state._copy_with(
            crew=release_from_scanners(state.crew),
            used_station_actions=state.used_station_actions | {StationAbility.MEDICAL},
        ).with_log("Medical: 1 crew released from Scanners.")
        return self._commit(new_state)

    def _handle_use_tactical(self, state: GameState, action: Action) -> GameState:
        dice_count = len(state.tactical_dice)
        if dice_count == 0:
            return state
        target = state.get_threat(action.payload.threat_id)
        if target is None or not can_target_threat(target, state.active_threats):
            return state

        damage = calculate_tactical_damage(dice_count)
        threats = apply_tactical_damage(
            state.active_threats,
            target.id,
            damage,
            is_damage_floor_active(state.active_threats),
        )

        hit = next(t for t in threats if t.id == target.id)
        noun = "die" if dice_count == 1 else "dice"
        message = f"Tactical: {dice_count} {noun} fire at {target.card.name} for {damage} damage."
        discard = state.discard
        if hit.is_destroyed:
            message += " Target destroyed!"
            if not hit.card.is_barrier:
                threats = tuple(t for t in threats if t.id != hit.id)
                discard = discard + (hit.card,)

        new_state = state._copy_with(
            active_threats=threats,
            discard=discard,
            tactical_dice=(),
        ).with_log(message)
        return self._commit(new_state)

    def _handle_use_science_shields(self, state: GameState, action: Action) -> GameState:
        if StationAbility.SCIENCE in state.used_station_actions:
            return state
        if count_at_station(state.crew, StationId.SCIENCE) == 0:
            return state
        if state.shield_recharge_blocked:
            return state.with_log("Science: shields cannot be recharged while shields are blocked!")
        shields = resolve_science(state.max_shields)
        new_state = state._copy_with(
            shields=shields,
            used_station_actions=state.used_station_actions | {StationAbility.SCIENCE},
        ).with_log(f"Science: shields recharged to {shields}/{state.max_shields}.")
        return self._commit(new_state)

    def _handle_use_science_stasis(self, state: GameState, action: Action) -> GameState:
        if StationAbility.SCIENCE in state.used_station_actions:
            return state
        if count_at_station(state.crew, StationId.SCIENCE) == 0:
            return state
        target = state.get_threat(action.payload.threat_id)
        if target is None:
            return state
        new_state = state._copy_with(
            active_threats=place_stasis_token(state.active_threats, target.id),
            used_station_actions=state.used_station_actions | {StationAbility.SCIENCE},
        ).with_log(f"Science: stasis token placed on {target.card.name}.")
        return self._commit(new_state)

    def _commander_ready(self, state: GameState) -> bool:
        return (
            not state.command_disabled
            and StationAbility.COMMANDER not in state.used_station_actions
            and count_at_station(state.crew, StationId.COMMANDER) > 0
        )

    def _handle_use_commander_reroll(self, state: GameState, action: Action) -> GameState:
        if not self._commander_ready(state):
            return state

        reroll_count = commander_reroll_count(state.crew)
        faces = action.payload.faces
        if faces is None:
            faces = self.rng.roll_crew_faces(reroll_count)
        crew, locked = lock_detected_threats(self._apply_pool_faces(state, faces))

        state = state._copy_with(
            crew=crew,
            used_station_actions=state.used_station_actions | {StationAbility.COMMANDER},
        ).with_log(f"Commander: re-rolled {reroll_count} dice.")
        if locked:
            state = state.with_log(f"{locked} new Threat Detected die/dice locked in Scanners.")

        return self._commit(self._run_scanners(state))

    def _handle_use_commander_change(self, state: GameState, action: Action) -> GameState:
        if not self._commander_ready(state):
            return state
        die = state.get_die(action.payload.die_id)
        face = action.payload.face
        if die is None or face is None:
            return state
        new_state = state._copy_with(
            crew=commander_change_die(state.crew, die.id, face),
            used_station_actions=state.used_station_actions | {StationAbility.COMMANDER},
        ).with_log(f"Commander: changed die to {face.value}.")
        return self._commit(new_state)

    def _handle_end_assign_phase(self, state: GameState, action: Action) -> GameState:
        eng_count = count_at_station(state.crew, StationId.ENGINEERING)
        if eng_count > 0:
            hull = resolve_engineering(state.hull, state.max_hull, eng_count)
            repaired = hull - state.hull
            state = state._copy_with(hull=hull)
            if repaired > 0:
                state = state.with_log(f"Engineering auto-resolved: +{repaired} hull.")

        state = self._draw_and_process(state)
        return self._commit(state._copy_with(phase=TurnPhase.DRAWING, tactical_dice=()))

    # ------------------------------------------------------------------
    # Drawing
    # ------------------------------------------------------------------

    def _handle_acknowledge_draw(self, state: GameState, action: Action) -> GameState:
        if state.setup_draws_remaining >= 2:
            state = state._copy_with(drawn_card=None, setup_draws_remaining=1)
            state = self._draw_and_process(state)
            return self._commit(state._copy_with(phase=TurnPhase.DRAWING))

        if state.setup_draws_remaining == 1:
            return self._commit(state._copy_with(
                phase=TurnPhase.ROLLING,
                drawn_card=None,
                setup_draws_remaining=0,
            ))

        return state._copy_with(phase=TurnPhase.ACTIVATING, drawn_card=None)

    # ------------------------------------------------------------------
    # Activating
    # ------------------------------------------------------------------

    def _handle_start_threat_roll(self, state: GameState, action: Action) -> GameState:
        return state._copy_with(threat_die_face=None)

    def _handle_threat_roll_complete(self, state: GameState, action: Action) -> GameState:
        face = action.payload.threat_face
        if face is None:
            return state

        result = activate_threats(
            state.hull, state.shields, state.active_threats, state.crew, face
        )

        deck = state.deck
        discard = state.discard + result.discarded
        count = result.reshuffle_discard
        if count and len(discard) >= count:
            deck = shuffle_into_deck(deck, discard[-count:], self.rng)
            discard = discard[:-count]

        state = state._copy_with(
            hull=result.hull,
            shields=result.shields,
            active_threats=result.threats,
            crew=result.crew,
            deck=deck,
            discard=discard,
            threat_die_face=face,
            log=state.log + (f"Threat Die rolled: {face.value}.",) + result.log,
        )
        state = self._with_passive_flags(state)

        if result.extra_draw:
            state = self._draw_and_process(state)

        return self._commit(state)

    def _handle_acknowledge_activate(self, state: GameState, action: Action) -> GameState:
        return state._copy_with(phase=TurnPhase.GATHERING)

    # ------------------------------------------------------------------
    # Gathering
    # ------------------------------------------------------------------

    def _handle_acknowledge_gather(self, state: GameState, action: Action) -> GameState:
        crew = gather_crew(state.crew, state.active_threats)
        ready = sum(1 for d in crew if d.location.is_pool)
        new_state = state._copy_with(
            crew=crew,
            phase=TurnPhase.ROLLING,
            turn_number=state.turn_number + 1,
            tactical_dice=(),
            drawn_card=None,
            selected_die_id=None,
            threat_die_face=None,
            used_station_actions=frozenset(),
        ).with_log(f"Crew gathered. {ready} crew ready for next turn.")
        return self._commit(new_state)

    # ------------------------------------------------------------------
    # Shared steps
    # ------------------------------------------------------------------

    def _apply_pool_faces(self, state: GameState, faces) -> tuple:
        """Give pool dice new faces in crew order; missing entries keep the old face."""
        crew = []
        pool_index = 0
        for d in state.crew:
            if d.location.is_pool:
                if pool_index < len(faces):
                    d = d.with_face(faces[pool_index])
                pool_index += 1
            crew.append(d)
        return tuple(crew)

    def _run_scanners(self, state: GameState, label_draws: bool = False) -> GameState:
        """Release full scanner groups and draw one card per group."""
        result = process_scanners(state.crew)
        state = state._copy_with(crew=result.crew)
        for i in range(result.extra_draws):
            state = self._draw_and_process(state)
            if label_draws:
                state = state.with_log(f"(Scanner draw {i + 1}/{result.extra_draws})")
        return state

    def _draw_and_process(self, state: GameState) -> GameState:
        """Draw one threat card and apply its arrival."""
        drawn = draw_card(state.deck)
        if drawn is None:
            return state

        card, deck = drawn
        state = state._copy_with(deck=deck, drawn_card=card).with_log(
            f"Threat card drawn: {card.name}."
        )

        if card.kind == ThreatKind.FILLER:
            return state._copy_with(discard=state.discard + (card,)).with_log(
                f"{card.name}: nothing happens."
            )

        if not card.immediate_on_reveal:
            return self._add_threat(state, card)

        return self._reveal(state, card)

    def _add_threat(self, state: GameState, card: ThreatCard) -> GameState:
        threat, counter = create_active_threat(card, state.next_instance_id)
        return state._copy_with(
            active_threats=state.active_threats + (threat,),
            next_instance_id=counter,
        )

    def _reveal(self, state: GameState, card: ThreatCard) -> GameState:
        """Fire an on-reveal effect. Unknown reveals leave the card drawn but inert."""
        reveal = card.reveal
        if reveal is None:
            return state

        if reveal.kind == RevealKind.HULL_STRIKE:
            result = apply_damage(state.hull, state.shields, reveal.hull_damage, 0)
            return state._copy_with(
                hull=result.hull,
                shields=result.shields,
                discard=state.discard + (card,),
            ).with_log(
                f"{card.name} fires! {reveal.hull_damage} hull damage dealt. Card discarded.",
                *result.log,
            )

        if reveal.kind == RevealKind.LOCK_CREW:
            state = self._add_threat(state, card)
            threat = state.active_threats[-1]
            die = next((d for d in state.crew if d.location.is_pool), None)
            if die is None:
                return state.with_log(f"{card.name}: no crew available to distract.")
            return state._copy_with(
                crew=replace_die(state.crew, die.moved_to(DieLocation.away_mission(threat.id))),
                active_threats=replace_threat(
                    state.active_threats, threat._copy_with(away_mission=(die.id,))
                ),
            ).with_log(f"{card.name}: {die.face.value} crew member is distracted!")

        return state

    def _process_resolved_threats(self, state: GameState) -> GameState:
        """Discard internal threats whose away mission is complete."""
        for threat in state.active_threats:
            if threat.card.kind != ThreatKind.INTERNAL:
                continue
            if not is_threat_resolved(threat, state.crew):
                continue
            threats, crew = resolve_threat(state.active_threats, state.crew, threat.id)
            state = state._copy_with(
                active_threats=threats,
                crew=crew,
                discard=state.discard + (threat.card,),
            ).with_log(f"{threat.card.name} resolved!")
        return state

    def _with_passive_flags(self, state: GameState) -> GameState:
        """Recompute passive flags after the threat list changes."""
        return state._copy_with(
            shield_recharge_blocked=is_shield_recharge_blocked(state.active_threats),
            command_disabled=is_command_disabled(state.active_threats),
        )

    def _with_win_loss(self, state: GameState) -> GameState:
        """Hull loss beats crew loss, which beats the win check."""
        if not state.is_playing:
            return state
        if state.hull <= 0:
            logger.info("Game lost: hull destroyed on turn %d", state.turn_number)
            return state._copy_with(status=GameStatus.LOST, loss_reason=LossReason.HULL)
        if check_crew_loss(state.crew):
            logger.info("Game lost: no crew available on turn %d", state.turn_number)
            return state._copy_with(status=GameStatus.LOST, loss_reason=LossReason.CREW)
        if check_win(state.deck, state.active_threats):
            logger.info("Game won on turn %d", state.turn_number)
            return state._copy_with(status=GameStatus.WON)
        return state

    def _commit(self, state: GameState) -> GameState:
        return self._with_win_loss(self._with_passive_flags(state))


def apply_action(
    state: GameState, action: Action, rng: RandomSource | None = None
) -> GameState:
    """Convenience function to apply an action with a one-off reducer."""
    reducer = Reducer(rng=rng or RandomSource())
    return reducer.apply(state, action)
