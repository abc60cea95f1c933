"""Fixed sample records served when a scraped page is unavailable."""
SAMPLE_P2E_GAMES = (
    {
        "name": "Axie Infinity",
        "description": "A Pokémon-inspired digital pet universe built on the Ethereum blockchain.",
        "website_url": "https://axieinfinity.com",
        "estimated_value": 2500,
        "participants": 45_000,
        "twitter_followers": 1_200_000,
        "discord_members": 350_000,
        "time_remaining": "15d 8h",
    },
    {
        "name": "The Sandbox",
        "description": "A virtual world where players can build, own, and monetize their gaming experiences.",
        "website_url": "https://www.sandbox.game",
        "estimated_value": 1800,
        "participants": 32_000,
        "twitter_followers": 800_000,
        "discord_members": 120_000,
        "time_remaining": "22d 14h",
    },
    {
        "name": "Illuvium",
        "description": "An open-world RPG adventure game on the Ethereum blockchain.",
        "website_url": "https://illuvium.io",
        "estimated_value": 3200,
        "participants": 28_000,
        "twitter_followers": 650_000,
        "discord_members": 180_000,
        "time_remaining": "9d 5h",
    },
)

SAMPLE_AIRDROPS = (
    {
        "name": "LayerZero Protocol",
        "description": "Omnichain interoperability protocol enabling seamless cross-chain applications.",
        "website_url": "https://layerzero.network",
        "estimated_value": 4500,
        "participants": 125_000,
        "twitter_followers": 950_000,
        "discord_members": 45_000,
        "time_remaining": "7d 2h",
    },
    {
        "name": "zkSync Era",
        "description": "Layer 2 scaling solution for Ethereum with zero-knowledge proofs.",
        "website_url": "https://zksync.io",
        "estimated_value": 3800,
        "participants": 89_000,
        "twitter_followers": 720_000,
        "discord_members": 35_000,
        "time_remaining": "12d 18h",
    },
)
