from __future__ import annotations

from typing import Any, Dict

# Status/log templates, keyed by language then message key
MESSAGES: Dict[str, Dict[str, str]] = {
    "en": {
        "player_name": "Player",
        "ai_name": "Computer",
        "first_player": "{name} goes first",
        "dealt": "Round {round}: dealt {count} cards to each player",
        "discarded": "{name} discarded {card}",
        "took_discard": "{name} paired {card} with {top} from the discard pile",
        "joker_on_joker": "{name} cannot pair two jokers; {card} was discarded",
        "committed": "{name} pledged {card} and must complete the pair",
        "completed": "{name} completed the pair with {card}",
        "extended": "{name} added {card} to their top group",
        "stole": "{name} stole {count} cards from {victim} with {card}",
        "game_end_empty": "Game over: not enough cards left to deal",
        "game_end_stalemate": "Game over: stalemate",
        "game_end_manual-skip": "Game skipped",
        "card_not_found": "Card not found in hand",
        "not_playing": "The game is not in progress",
        "not_your_turn": "It is not {name}'s turn",
        "in_commitment": "You must complete your commitment with rank {rank} first",
        "commitment_rank": "You must complete your commitment with rank {rank}",
        "discard_empty": "The discard pile is empty",
        "no_match": "{card} does not match",
        "no_pair": "No pair available for this card",
        "bad_victim": "Choose another player to steal from",
        "victim_empty": "{victim} has no cards to steal",
        "victim_locked": "{victim} is in a commitment; a pledged card cannot be stolen",
        "unsplittable": "Those cards cannot be grouped",
        "ai_thinking": "Wait for the computer to finish its turn",
        "ai_seat": "{name} is played by the computer",
        "unknown_command": "Unknown command",
    },
    "cs": {
        "player_name": "Hráč",
        "ai_name": "Počítač",
        "first_player": "Začíná {name}",
        "dealt": "Kolo {round}: každý hráč dostal {count} karet",
        "discarded": "{name} odhodil {card}",
        "took_discard": "{name} spároval {card} s {top} z odhazovacího balíčku",
        "joker_on_joker": "{name} nemůže spárovat dva žolíky; {card} byla odhozena",
        "committed": "{name} založil {card} a musí doplnit pár",
        "completed": "{name} doplnil pár kartou {card}",
        "extended": "{name} přidal {card} na svou horní skupinu",
        "stole": "{name} ukradl hráči {victim} {count} karet pomocí {card}",
        "game_end_empty": "Konec hry: nedostatek karet k rozdání",
        "game_end_stalemate": "Konec hry: pat",
        "game_end_manual-skip": "Hra přeskočena",
        "card_not_found": "Karta není v ruce",
        "not_playing": "Hra neprobíhá",
        "not_your_turn": "{name} není na tahu",
        "in_commitment": "Nejprve musíš doplnit závazek kartou {rank}",
        "commitment_rank": "Závazek musíš doplnit kartou {rank}",
        "discard_empty": "Odhazovací balíček je prázdný",
        "no_match": "{card} nepasuje",
        "no_pair": "Pro tuto kartu není k dispozici pár",
        "bad_victim": "Vyber jiného hráče",
        "victim_empty": "{victim} nemá co ukrást",
        "victim_locked": "{victim} má závazek; založenou kartu nelze ukrást",
        "unsplittable": "Tyto karty nelze seskupit",
        "ai_thinking": "Počkej, až počítač dohraje tah",
        "ai_seat": "Za hráče {name} hraje počítač",
        "unknown_command": "Neznámý příkaz",
    },
}

DEFAULT_LANG = "en"


def msg(lang: str, key: str, **kwargs: Any) -> str:
    table = MESSAGES.get(lang, MESSAGES[DEFAULT_LANG])
    template = table.get(key, MESSAGES[DEFAULT_LANG].get(key, key))
    return template.format(**kwargs)
