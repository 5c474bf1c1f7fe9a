"""
Dice Roller Plugin

A stateless plugin exposing the dicebox engine to chat.

This plugin runs as a separate process and communicates entirely via NATS.

Commands:
    !roll <expression>                - Roll dice
    !rolld <expression> <description> - Roll dice with a description line
    !rollhelp [-d]                    - Show brief or detailed help

NATS Subjects:
    Subscribe:
        dicebox.command.dice.roll - Handle !roll commands
        dicebox.command.dice.describe - Handle !rolld commands
        dicebox.command.dice.help - Handle !rollhelp commands
    Publish:
        dicebox.event.dice.rolled - Event emitted after each roll
"""

import json
import logging
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from nats.aio.client import Client as NATS

from dicebox import DiceRoller, Result, format_error, format_result

from .help import DESCRIBE_USAGE, ROLL_USAGE, get_help
from .limits import DiceLimits


class DiceRollerPlugin:
    """
    Dice rolling plugin for tabletop games in chat.

    This plugin communicates entirely via NATS messaging:
    - Subscribes to command subjects for !roll, !rolld and !rollhelp
    - Publishes events for analytics and session logs
    - Uses request/reply pattern for command responses

    Examples:
        !roll d20              -> 🎲 d20 = [15] = 15
        !roll 3d6+2            -> 🎲 3d6+2 = [4,5,3] + 2 = 14
        !roll 4d6kh1           -> 🎲 4d6kh1 = [4,5,3,2]→[5] = 5
        !rolld 2d6 Damage      -> Damage\\n🎲 2d6 = [4,3] = 7
    """

    # Plugin metadata
    NAMESPACE = "dice-roller"
    VERSION = "1.0.0"
    DESCRIPTION = "Roll dice expressions"

    # NATS subjects
    SUBJECT_ROLL = "dicebox.command.dice.roll"
    SUBJECT_DESCRIBE = "dicebox.command.dice.describe"
    SUBJECT_HELP = "dicebox.command.dice.help"
    EVENT_ROLLED = "dicebox.event.dice.rolled"

    def __init__(
        self,
        nats_client: NATS,
        config: Optional[Dict[str, Any]] = None,
        roller: Optional[DiceRoller] = None,
    ):
        """
        Initialize dice roller plugin.

        Args:
            nats_client: Connected NATS client for messaging
            config: Plugin configuration dict
            roller: Dice roller (defaults to one with a system RNG)
        """
        self.nats = nats_client
        self.config = config or {}
        self.logger = logging.getLogger(f"{__name__}.{self.NAMESPACE}")
        self._initialized = False
        self._subscriptions: List[Any] = []

        # Load configuration with defaults
        self.limits = DiceLimits(
            max_dice=self.config.get("max_dice", DiceLimits.DEFAULT_MAX_DICE),
            max_sides=self.config.get("max_sides", DiceLimits.DEFAULT_MAX_SIDES),
        )
        self.emit_events = self.config.get("emit_events", True)
        self.show_emoji = self.config.get("show_emoji", True)

        self.roller = roller or DiceRoller()

    async def initialize(self) -> None:
        """
        Initialize plugin and subscribe to NATS subjects.
        """
        self.logger.info(f"Initializing {self.NAMESPACE} plugin v{self.VERSION}")

        handlers = [
            (self.SUBJECT_ROLL, self._handle_roll),
            (self.SUBJECT_DESCRIBE, self._handle_describe),
            (self.SUBJECT_HELP, self._handle_help),
        ]
        for subject, handler in handlers:
            sub = await self.nats.subscribe(subject, cb=handler)
            self._subscriptions.append(sub)

        self._initialized = True
        self.logger.info(
            f"Plugin initialized. Subscribed to: "
            f"{', '.join(subject for subject, _ in handlers)}"
        )

    async def shutdown(self) -> None:
        """
        Shutdown plugin and cleanup subscriptions.
        """
        self.logger.info(f"Shutting down {self.NAMESPACE} plugin")

        for sub in self._subscriptions:
            try:
                await sub.unsubscribe()
            except Exception as e:
                self.logger.warning(f"Error unsubscribing: {e}")

        self._subscriptions.clear()
        self._initialized = False
        self.logger.info("Plugin shutdown complete")

    # =========================================================================
    # NATS Command Handlers
    # =========================================================================

    async def _handle_roll(self, msg) -> None:
        """
        Handle !roll command from NATS.

        Expected message format:
            {
                "channel": "string",
                "user": "string",
                "args": "3d6+2"
            }

        Response format:
            {
                "success": true,
                "result": {
                    "expression": "3d6+2",
                    "total": 14,
                    "detail": "[4,5,3] + 2",
                    "rolls": [{"faces": 6, "results": [4, 5, 3], ...}],
                    "formatted": "🎲 3d6+2 = [4,5,3] + 2 = 14"
                }
            }
        """
        data = await self._decode(msg)
        if data is None:
            return

        response = await self._process_roll(
            data.get("channel", "unknown"),
            data.get("user", "unknown"),
            data.get("args", "").strip(),
        )
        if msg.reply:
            await self._respond(msg, response)

    async def _handle_describe(self, msg) -> None:
        """
        Handle !rolld command from NATS.

        The first word of args is the expression, the rest the description:
            {"channel": "#dnd", "user": "alice", "args": "2d6 Attack damage"}
        """
        data = await self._decode(msg)
        if data is None:
            return

        parts = data.get("args", "").split(None, 1)
        if parts:
            notation = parts[0]
            description = parts[1].strip() if len(parts) > 1 else None
            response = await self._process_roll(
                data.get("channel", "unknown"),
                data.get("user", "unknown"),
                notation,
                description=description,
            )
        else:
            response = {"success": False, "error": DESCRIBE_USAGE}

        if msg.reply:
            await self._respond(msg, response)

    async def _handle_help(self, msg) -> None:
        """
        Handle !rollhelp command from NATS.

        Passing "-d" or "--detailed" in args selects the detailed help.
        """
        data = await self._decode(msg)
        if data is None:
            return

        args = data.get("args", "").split()
        detailed = "-d" in args or "--detailed" in args
        if msg.reply:
            await self._respond(
                msg, {"success": True, "result": {"formatted": get_help(detailed)}}
            )

    async def _decode(self, msg) -> Optional[Dict[str, Any]]:
        """Decode a JSON request, replying with an error if it is malformed."""
        try:
            data = json.loads(msg.data.decode())
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            self.logger.error(f"Invalid message format: {e}")
            data = None
        else:
            if isinstance(data, dict):
                return data
            self.logger.error(
                f"Invalid message format: expected an object, got {type(data).__name__}"
            )

        if msg.reply:
            await self._respond(
                msg, {"success": False, "error": "Invalid message format"}
            )
        return None

    async def _respond(self, msg, data: Dict[str, Any]) -> None:
        """Send JSON response to NATS message."""
        try:
            await msg.respond(json.dumps(data).encode())
        except Exception as e:
            self.logger.error(f"Error sending response: {e}")

    # =========================================================================
    # Core Logic
    # =========================================================================

    async def _process_roll(
        self,
        channel: str,
        user: str,
        notation: str,
        description: Optional[str] = None,
    ) -> Dict[str, Any]:
        """
        Process a dice roll request.

        Args:
            channel: Channel where command was issued
            user: User who issued command
            notation: Dice expression
            description: Optional description line

        Returns:
            Response dict with success status and result or error
        """
        if not notation:
            return {
                "success": False,
                "error": ROLL_USAGE,
            }

        try:
            result = self.roll(notation)
        except ValueError as e:
            self.logger.debug(f"Roll error for '{notation}': {e}")
            return {
                "success": False,
                "error": format_error(str(e), show_emoji=self.show_emoji),
            }

        if self.emit_events:
            await self._emit_roll_event(channel, user, result, description)

        payload = result.to_dict()
        payload["formatted"] = format_result(
            result, description=description, show_emoji=self.show_emoji
        )
        return {"success": True, "result": payload}

    # =========================================================================
    # Event Emission
    # =========================================================================

    async def _emit_roll_event(
        self,
        channel: str,
        user: str,
        result: Result,
        description: Optional[str] = None,
    ) -> None:
        """
        Emit dice.rolled event for analytics and session logs.

        Args:
            channel: Channel where roll occurred
            user: User who rolled
            result: Evaluated dice result
            description: Optional description supplied with the roll
        """
        event_data = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "channel": channel,
            "user": user,
            **result.to_dict(),
            "description": description,
        }

        try:
            await self.nats.publish(
                self.EVENT_ROLLED, json.dumps(event_data).encode()
            )
        except Exception as e:
            self.logger.debug(f"Could not publish roll event: {e}")

    # =========================================================================
    # Direct API (for testing or direct usage)
    # =========================================================================

    def roll(self, notation: str) -> Result:
        """
        Roll dice directly (synchronous).

        Args:
            notation: Dice expression (e.g., "3d6+2")

        Returns:
            Evaluated Result

        Raises:
            ValueError: If the expression is invalid or exceeds limits
        """
        parsed = self.roller.parser.parse(notation)
        self.limits.check(parsed)
        return self.roller.evaluate_parsed(notation.strip(), parsed)
