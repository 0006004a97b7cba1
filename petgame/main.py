import sys
import pygame
from petgame.constants import (
    SCREEN_WIDTH, SCREEN_HEIGHT, FPS, SAVE_FILE, DEBUG, TICK_INTERVAL, MAX_FOOD, MAX_HAPPINESS,
    MAX_MESS, COLOR_BG, COLOR_UI_BAR_BG, COLOR_FULLNESS, COLOR_HAPPY, COLOR_BEHAVIOR, COLOR_MESS,
    COLOR_TEXT, COLOR_PROMPT, COLOR_EGG, COLOR_PET_BODY, COLOR_PET_EYES,
)
from petgame.database import open_store
from petgame.game import PetGame
from petgame.models import LifeStage, Prompt

TICK_EVENT = pygame.USEREVENT + 1

PROMPT_TEXT = {
    Prompt.NAMING: "Your egg hatched! Type a name and press ENTER.",
    Prompt.ADULT_INFO: "{name} is all grown up! Press ENTER.",
    Prompt.ELDER_INFO: "{name} is getting on in years. Press ENTER.",
    Prompt.PASSED_AWAY: "{name} has passed away. Press ENTER for a new egg.",
}


class GameEngine:
    """Window, input and drawing around a PetGame."""
    def __init__(self, save_file=SAVE_FILE, debug=DEBUG):
        pygame.init()
        self.screen = pygame.display.set_mode((SCREEN_WIDTH, SCREEN_HEIGHT))
        pygame.display.set_caption("Pet Game")
        self.clock = pygame.time.Clock()
        self.font = pygame.font.Font(None, 24)
        self.small_font = pygame.font.Font(None, 18)
        self.debug = debug
        self.name_buffer = ""
        self.frames_rendered = 0
        self.pet_changes = 0

        self.store = open_store(save_file)
        self.game = PetGame(self.store, render_callback=self.on_pet_changed)
        # Ticks always fire on schedule; the pet ignores them while paused
        pygame.time.set_timer(TICK_EVENT, int(TICK_INTERVAL * 1000))

        self.key_actions = {
            pygame.K_f: self.game.handle_feed,
            pygame.K_p: self.game.handle_pet,
            pygame.K_c: self.game.handle_clean,
            pygame.K_SPACE: self.game.toggle_pause,
        }
        if self.debug:
            self.key_actions[pygame.K_F5] = self.game.force_update
            self.key_actions[pygame.K_F12] = self.game.reset

    @property
    def pet(self):
        return self.game.pet

    def on_pet_changed(self, pet):
        self.pet_changes += 1

    def handle_key(self, event):
        prompt = self.game.current_prompt()
        if event.key == pygame.K_RETURN:
            if self.game.acknowledge(self.name_buffer):
                self.name_buffer = ""
            return
        if prompt == Prompt.NAMING:
            if event.key == pygame.K_BACKSPACE:
                self.name_buffer = self.name_buffer[:-1]
            elif event.unicode and event.unicode.isprintable():
                self.name_buffer += event.unicode
            return
        action = self.key_actions.get(event.key)
        if action:
            action()

    def draw_bar(self, x, y, value, maximum, color, label):
        bar_width, bar_height = 100, 14
        pygame.draw.rect(self.screen, COLOR_UI_BAR_BG, (x, y, bar_width, bar_height), border_radius=4)
        fill = max(0, min(bar_width, int(bar_width * value / maximum)))
        pygame.draw.rect(self.screen, color, (x, y, fill, bar_height), border_radius=4)
        self.screen.blit(self.small_font.render(label, True, COLOR_TEXT), (x, y - 14))

    def draw_pet(self, cx, cy):
        if self.pet.life_stage == LifeStage.EGG:
            pygame.draw.ellipse(self.screen, COLOR_EGG, (cx - 22, cy - 30, 44, 60))
            return
        radius = {LifeStage.PUP: 22, LifeStage.ADULT: 32, LifeStage.ELDER: 30}[self.pet.life_stage]
        body = COLOR_PET_BODY if self.pet.alive else COLOR_UI_BAR_BG
        pygame.draw.circle(self.screen, body, (cx, cy), radius)
        eye_y = cy - radius // 3
        for dx in (-radius // 3, radius // 3):
            pygame.draw.circle(self.screen, COLOR_PET_EYES, (cx + dx, eye_y), max(2, radius // 8))
        for i in range(self.pet.mess_counter):
            pygame.draw.circle(self.screen, COLOR_MESS, (cx + radius + 20 + i * 14, cy + radius - 6), 5)

    def draw_debug(self):
        y = 60
        for line in self.pet.debug_info().lines():
            self.screen.blit(self.small_font.render(line, True, COLOR_TEXT), (SCREEN_WIDTH - 120, y))
            y += 16

    def draw(self):
        self.screen.fill(COLOR_BG)
        title = self.pet.name or "???"
        if self.pet.paused:
            title += " (paused)"
        self.screen.blit(self.font.render(title, True, COLOR_TEXT), (20, 10))

        self.draw_bar(20, 60, self.pet.food, MAX_FOOD, COLOR_FULLNESS, "Food")
        self.draw_bar(20, 95, self.pet.happiness, MAX_HAPPINESS, COLOR_HAPPY, "Happiness")
        self.draw_bar(20, 130, min(self.pet.behavior, 20), 20, COLOR_BEHAVIOR, "Behavior")
        self.draw_bar(20, 165, self.pet.mess_counter, MAX_MESS, COLOR_MESS, "Mess")

        self.draw_pet(SCREEN_WIDTH // 2, SCREEN_HEIGHT // 2 + 20)

        prompt = self.game.current_prompt()
        if prompt is not None:
            text = PROMPT_TEXT[prompt].format(name=self.pet.name or "Your pet")
            self.screen.blit(self.small_font.render(text, True, COLOR_PROMPT), (20, SCREEN_HEIGHT - 60))
            if prompt == Prompt.NAMING:
                self.screen.blit(self.font.render(self.name_buffer + "_", True, COLOR_TEXT), (20, SCREEN_HEIGHT - 40))
        elif self.pet.life_stage != LifeStage.EGG:
            hint = "[F]eed  [P]et  [C]lean  [SPACE] pause"
            self.screen.blit(self.small_font.render(hint, True, COLOR_TEXT), (20, SCREEN_HEIGHT - 24))

        if self.debug:
            self.draw_debug()
        pygame.display.flip()
        self.frames_rendered += 1

    def step(self):
        """One frame: events, cooldowns, drawing. Returns False when the window closes."""
        dt = self.clock.tick(FPS) / 1000.0
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                return False
            if event.type == TICK_EVENT:
                self.game.tick()
            elif event.type == pygame.KEYDOWN:
                self.handle_key(event)
        self.game.update_cooldowns(dt)
        self.draw()
        return True

    def run(self):
        running = True
        while running:
            running = self.step()
        self.pet.save()
        self.store.close()
        pygame.quit()


def main():
    print("Starting Pet Game...")
    engine = GameEngine()
    try:
        engine.run()
    except KeyboardInterrupt:
        engine.pet.save()
        pygame.quit()
    print("Exiting game. Pygame quit.")
    return 0


if __name__ == "__main__":
    sys.exit(main())
