# Built-in word lists for the hidden-word game.
# Lists overlap freely; callers de-duplicate and filter by length.

WORD_LISTS = {
    "easy": [
        # Nature
        "CAT", "DOG", "SUN", "MOON", "STAR", "TREE", "BOOK", "BALL", "FISH", "BIRD",
        "HOME", "LOVE", "FIRE", "WIND", "SNOW", "RAIN", "SKY", "SEA", "LAND", "WAVE",
        "ROCK", "WOOD", "LEAF", "ROSE", "LAKE", "HILL", "SAND", "MIST", "DUSK", "DAWN",
        # Food
        "CAKE", "PIE", "RICE", "MEAT", "EGG", "MILK", "SODA", "TEA", "BEEF", "PEAR",
        "PLUM", "LIME", "CORN", "BEAN", "SOUP", "TACO", "JAM", "NUT", "FIG", "YAM",
        # Animals
        "BEAR", "WOLF", "DEER", "FOX", "LION", "OWL", "CROW", "DUCK", "SWAN", "SEAL",
        "CRAB", "FROG", "TOAD", "MOLE", "BAT", "ANT", "BEE", "EEL", "YAK", "ELK",
        # Tech
        "WEB", "APP", "CODE", "DATA", "BYTE", "CHIP", "DISK", "FILE", "GAME", "HACK",
        "LINK", "WIFI", "CPU", "GPU", "RAM", "ROM", "BUG", "LOG", "KEY", "BIT",
        # Money
        "CASH", "BANK", "COIN", "GOLD", "DEBT", "LOAN", "TAX", "FEE", "BUY", "SELL",
        "PAY", "SAVE", "COST", "BILL", "CARD", "MINT", "FUND", "DEAL", "RENT", "WAGE",
        # Sport and play
        "GOAL", "TEAM", "PLAY", "WIN", "LOSE", "RUN", "JUMP", "KICK", "SWIM", "DIVE",
        "RIDE", "BIKE", "SKI", "SURF", "BOSS", "LOOT", "DROP", "RARE", "EPIC", "RANK",
    ],
    "medium": [
        # Tech
        "MOUSE", "PIXEL", "ROBOT", "SCAN", "VIRUS", "ZOOM", "CLOUD", "EMAIL", "LOGIN", "MODEM",
        "CACHE", "QUERY", "STACK", "QUEUE", "ARRAY", "LOOP", "NODE", "HASH", "PORT", "SHELL",
        # Markets
        "STOCK", "SHARE", "TRADE", "PRICE", "VALUE", "ASSET", "BONDS", "FUNDS", "DEBIT", "LOSS",
        "GAIN", "RISK", "YIELD", "RATE", "FOREX", "STAKE", "VAULT", "TOKEN", "LEDGER", "BUDGET",
        # Fantasy
        "MAGE", "RUNE", "SPELL", "ELF", "ORC", "TROLL", "SWORD", "SHIELD", "CROWN", "QUEST",
        "WAND", "SCROLL", "POTION", "GOLEM", "DWARF", "FAIRY", "GIANT", "CHARM", "CURSE", "TOWER",
        # Horror
        "DOOM", "GHOST", "SKULL", "DEMON", "CRYPT", "GRAVE", "FANG", "BONE", "HAUNT", "SHADE",
        # Sci-fi
        "WARP", "LASER", "ALIEN", "NEXUS", "CYBER", "DROID", "ORBIT", "COMET", "PROBE", "NOVA",
        # Gaming
        "COMBO", "LEVEL", "SKILL", "CLASS", "TIER", "SPAWN", "RAID", "GUILD", "ARENA", "BONUS",
    ],
    "hard": [
        "SERVER", "CLIENT", "ROUTER", "SCREEN", "CAMERA", "SEARCH", "STREAM", "BUFFER", "COOKIE", "UPLOAD",
        "BROWSER", "PACKET", "KERNEL", "SCRIPT", "MODULE", "BINARY", "CIPHER", "SOCKET", "THREAD", "COMPILE",
        "CREDIT", "PROFIT", "INVEST", "BROKER", "MARKET", "EQUITY", "FUTURES", "OPTIONS", "BALANCE", "PAYMENT",
        "WIZARD", "DRAGON", "KNIGHT", "CASTLE", "DUNGEON", "GOBLIN", "PHOENIX", "GRIFFIN", "ORACLE", "SORCERY",
        "REAPER", "SPECTER", "PHANTOM", "VAMPIRE", "ZOMBIE", "BANSHEE", "WRAITH", "COFFIN", "SHADOW", "HOLLOW",
        "GALAXY", "NEBULA", "PLANET", "ROCKET", "QUASAR", "PULSAR", "CYBORG", "ANDROID", "STATION", "VOYAGER",
        "PLAYER", "LEGEND", "RESPAWN", "MISSION", "BATTLE", "VICTORY", "CHAMPION", "PORTAL", "STEALTH", "SNIPER",
        "GLITCH", "MATRIX", "SIGNAL", "SYSTEM", "VECTOR", "CIRCUIT", "NETWORK", "DECODE", "ENCRYPT", "PROXY",
    ],
    "extreme": [
        "KEYBOARD", "MONITOR", "SPEAKER", "SOFTWARE", "HARDWARE", "DOWNLOAD", "DATABASE", "FIREWALL", "PROTOCOL", "ALGORITHM",
        "DIVIDEND", "PORTFOLIO", "STRATEGY", "CURRENCY", "EXCHANGE", "INTEREST", "MORTGAGE", "TREASURY", "LIQUIDITY", "ARBITRAGE",
        "NECROMANCER", "ENCHANTER", "WARLOCK", "SORCERER", "PALADIN", "BERSERKER", "LABYRINTH", "MINOTAUR", "LEVIATHAN", "BASILISK",
        "NIGHTMARE", "POLTERGEIST", "SKELETON", "GRAVEYARD", "HAUNTING", "CAULDRON", "GARGOYLE", "WEREWOLF", "MUMMIFY", "TOMBSTONE",
        "ASTEROID", "SPACESHIP", "TELEPORT", "HOLOGRAM", "STARSHIP", "COSMONAUT", "EXOPLANET", "HYPERDRIVE", "TERRAFORM", "SATELLITE",
        "OVERLORD", "CHECKPOINT", "SPEEDRUN", "TOURNAMENT", "MULTIPLAYER", "INVENTORY", "CRAFTING", "ACHIEVEMENT", "LEADERBOARD", "SIDEQUEST",
        "QUANTUM", "FRACTAL", "SYNTHWAVE", "OVERCLOCK", "TERMINAL", "MAINFRAME", "BACKDOOR", "SANDBOX", "DEBUGGER", "COMPILER",
    ],
}

# Used when no list word fits a level's length bounds
FALLBACK_WORDS = [
    "WORD", "GLITCH", "GAME", "FIND", "PLAY",
    "DOOM", "GHOST", "SKULL", "CURSE", "DEMON", "REAPER",
    "MAGE", "WIZARD", "DRAGON", "KNIGHT", "RUNE", "SPELL",
    "WARP", "LASER", "ALIEN", "NEXUS", "CYBER", "DROID",
    "BOSS", "LOOT", "QUEST", "COMBO", "EPIC", "LEVEL",
]


def all_words():
    '''
    Returns every list word once, upper-cased, in first-seen order.
    '''
    seen = set()
    words = []
    for tier_words in WORD_LISTS.values():
        for word in tier_words:
            word = word.upper()
            if word not in seen:
                seen.add(word)
                words.append(word)
    return words
