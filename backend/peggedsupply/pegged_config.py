# Pegged asset configuration
# pegged_metadata: one entry per tracked pegged asset, keyed by the adapter name (= module in adapters/pegged_assets)

# name: the name of the token
# symbol: the ticker symbol of the token
# peg_type: the denomination the token is pegged to (peggedUSD, peggedEUR, peggedGOLD, peggedCHF, peggedVAR)
# gecko_id: the id of the token on coingecko
# decimals: default decimals of the token contracts (can be overwritten per source)

# chain_contracts: per asset, per chain the contracts used by the supply sources
#   issued: native token contracts on their home chain (role 'minted')
#   reserves / unreleased / collateral: addresses holding issued but not circulating supply (role 'unreleased')
#   bridgedFromXXX: bridged copies of the token on this chain, originally issued on chain XXX
#   bridgeOnETH: lockbox addresses on Ethereum holding the bridged supply of this chain

pegged_metadata = {
    "glo_dollar": {
        "name": "Glo Dollar",
        "symbol": "USDGLO",
        "peg_type": "peggedUSD",
        "gecko_id": "glo-dollar",
        "decimals": 18,
    },
    "celo_euro": {
        "name": "Celo Euro",
        "symbol": "CEUR",
        "peg_type": "peggedEUR",
        "gecko_id": "celo-euro",
        "decimals": 18,
    },
    "first_digital_usd": {
        "name": "First Digital USD",
        "symbol": "FDUSD",
        "peg_type": "peggedUSD",
        "gecko_id": "first-digital-usd",
        "decimals": 18,
    },
    "vnx_euro": {
        "name": "VNX EURO",
        "symbol": "VEUR",
        "peg_type": "peggedEUR",
        "gecko_id": "vnx-euro",
        "decimals": 18,
    },
    "vnx_gold": {
        "name": "VNX Gold",
        "symbol": "VNXAU",
        "peg_type": "peggedGOLD",
        "gecko_id": "vnx-gold",
        "decimals": 18,
    },
    "vnx_swiss_franc": {
        "name": "VNX Swiss Franc",
        "symbol": "VCHF",
        "peg_type": "peggedCHF",
        "gecko_id": "vnx-swiss-franc",
        "decimals": 18,
    },
    "worldwide_usd": {
        "name": "Worldwide USD",
        "symbol": "WUSD",
        "peg_type": "peggedUSD",
        "gecko_id": "worldwide-usd",
        "decimals": 6,
    },
    "neutrino": {
        "name": "Neutrino USD",
        "symbol": "USDN",
        "peg_type": "peggedUSD",
        "gecko_id": "neutrino",
        "decimals": 18,
    },
    "binance_usd": {
        "name": "Binance USD",
        "symbol": "BUSD",
        "peg_type": "peggedUSD",
        "gecko_id": "binance-usd",
        "decimals": 18,
    },
    "usn": {
        "name": "USN",
        "symbol": "USN",
        "peg_type": "peggedUSD",
        "gecko_id": "usn",
        "decimals": 18,
    },
    "dei_token": {
        "name": "DEI",
        "symbol": "DEI",
        "peg_type": "peggedUSD",
        "gecko_id": "dei-token",
        "decimals": 18,
    },
}

chain_contracts = {
    "glo_dollar": {
        "ethereum": {"issued": ["0x4F604735c1cF31399C6E711D5962b2B3E0225AD3"]},
        "polygon": {"issued": ["0x4F604735c1cF31399C6E711D5962b2B3E0225AD3"]},
        "optimism": {"issued": ["0x4F604735c1cF31399C6E711D5962b2B3E0225AD3"]},
        "celo": {"issued": ["0x4F604735c1cF31399C6E711D5962b2B3E0225AD3"]},
        "arbitrum": {"issued": ["0x4F604735c1cF31399C6E711D5962b2B3E0225AD3"]},
        "base": {"issued": ["0x4F604735c1cF31399C6E711D5962b2B3E0225AD3"]},
    },
    "celo_euro": {
        "celo": {"issued": ["0xd8763cba276a3738e6de85b4b3bf5fded6d6ca73"]},
        "ethereum": {"bridgedFromCelo": ["0x977453366b8d205f5c9266b6ba271e850a814a50"]},  # Optics
        "polygon": {"bridgedFromCelo": ["0x2f0173dFE97a7Dc670D5A10b35C4263cfEcFa853"]},  # Optics
        "solana": {"bridgedFromCelo": ["7g166TuBmnoHKvS2PEkZx6kREZtbfjUxCHGWjCqoDXZv"]},  # allbridge
    },
    "first_digital_usd": {
        "ethereum": {
            "issued": ["0xc5f0f7b66764F6ec8C8Dff7BA683102295E16409"],
            "collateral": ["0x47ac0Fb4F2D84898e4D9E7b4DaB3C24507a6D503"],  # binance-peg collaterals
        },
        "bsc": {"issued": ["0xc5f0f7b66764f6ec8c8dff7ba683102295e16409"]},
    },
    "vnx_euro": {
        "ethereum": {"issued": ["0x6ba75d640bebfe5da1197bb5a2aff3327789b5d3"]},
        "polygon": {"issued": ["0xE4095d9372E68d108225c306A4491cacfB33B097"]},
        "avalanche": {"issued": ["0x7678e162f38ec9ef2bfd1d0aaf9fd93355e5fa0b"]},
        "solana": {"issued": ["C4Kkr9NZU3VbyedcgutU6LKmi6MKz81sx6gRmk5pX519"]},
        "q": {"issued": ["0x513f99dee650f529d7c65bb5679f092b64003520"]},
        "tezos": {"issued": ["KT1FenS7BCUjn1otfFyfrfxguiGnL4UTF3aG"]},
    },
    "vnx_gold": {
        "ethereum": {"issued": ["0x6d57B2E05F26C26b549231c866bdd39779e4a488"]},
        "polygon": {"issued": ["0xC8bB8eDa94931cA2F20EF43eA7dBD58E68400400"]},
        "solana": {"issued": ["9TPL8droGJ7jThsq4momaoz6uhTcvX2SeMqipoPmNa8R"]},
        "q": {"issued": ["0xe4fadbbf24f118b1e63d65f1aac2a825a07f7619"]},
        "tezos": {"issued": ["KT1LSH97386CURN9FgRNqdQJoHaHY6e1vxUv"]},
    },
    "vnx_swiss_franc": {
        "ethereum": {"issued": ["0x79d4f0232A66c4c91b89c76362016A1707CFBF4f"]},
        "polygon": {"issued": ["0xCdB3867935247049e87c38eA270edD305D84c9AE"]},
        "avalanche": {"issued": ["0x228a48df6819ccc2eca01e2192ebafffdad56c19"]},
        "solana": {"issued": ["AhhdRu5YZdjVkKR3wbnUDaymVQL2ucjMQ63sZ3LFHsch"]},
        "q": {"issued": ["0x65b9d36281e97418793f3430793f88440dab68d7"]},
        "tezos": {"issued": ["KT1LssxZqfQtRFv1CRkzX9E9gzap9iFrtWmq"]},
    },
    "worldwide_usd": {
        "ethereum": {"issued": ["0xb6667b04Cb61Aa16B59617f90FFA068722Cf21dA"]},
        "polygon": {"issued": ["0xA04C86c411320444d4A99d44082e057772E8cF96"]},
    },
    "neutrino": {
        "waves": {"issued": ["DG2xFkPdDwKUoBkzGAhQtLpSGzfXLiCYPEzeKH2Ad24p"]},
        "ethereum": {"bridgedFromWaves": ["0x674c6ad92fd080e4004b2312b45f796a192d27a0"]},
        "polygon": {"bridgedFromWaves": ["0x013f9c3fac3e2759d7e90aca4f9540f75194a0d7"]},
        "bsc": {"bridgedFromWaves": ["0x03ab98f5dc94996F8C33E15cD4468794d12d41f9"]},
    },
    "binance_usd": {
        "ethereum": {"issued": ["0x4fabb145d64652a948d72533023f6e7a623c7c53"]},
        "avalanche": {"bridgedFromETH": ["0x19860ccb0a68fd4213ab9d8266f7bbf05a8dde98"]},
        "iotex": {"bridgedFromETH": ["0x84abcb2832be606341a50128aeb1db43aa017449"]},  # don't know if source is eth or bsc
        "solana": {
            "bridgedFromETH": [
                "33fsBLA8djQm82RpHmE3SuVrPGtZBWNYExsEUeKX1HXX",  # wormhole
                "AJ1W9A9N9dEMdVyoDiam2rV44gnBm2csrPDP7xqcapgX",  # wormhole
                "6nuaX3ogrr2CaoAPjtaKHAoBNWok32BMcRozuf32s2QF",  # allbridge
            ],
        },
        "loopring": {"bridgeOnETH": ["0x674bdf20A0F284D710BC40872100128e2d66Bd3f"]},
        "ethereumclassic": {"bridgedFromETH": ["0xb12c13e66AdE1F72f71834f2FC5082Db8C091358"]},  # multichain
        "near": {"bridgedFromETH": ["4fabb145d64652a948d72533023f6e7a623c7c53.factory.bridge.near"]},  # rainbow bridge
        "thundercore": {"bridgedFromETH": ["0xb12c13e66ade1f72f71834f2fc5082db8c091358"]},  # multichain
        "osmosis": {"bridgedFromETH": ["ibc/6329DD8CF31A334DD5BE3F68C846C9FE313281362B37686A62343BAC1EB1546D"]},
        "era": {"bridgedFromETH": ["0x9a455d1a2b4630ffdb9a2307f2e875400d28b3c5"]},
    },
    "usn": {
        "near": {"issued": ["usn"]},
        "aurora": {"bridgedFromNear": ["0x5183e1B1091804BC2602586919E6880ac1cf2896"]},
    },
    "dei_token": {
        "fantom": {"issued": ["0xDE1E704dae0B4051e80DAbB26ab6ad6c12262DA0"]},
    },
}

# every chain an adapter may report on; adapters naming other chains are rejected
known_chains = [
    "ethereum", "polygon", "avalanche", "bsc", "optimism", "celo", "arbitrum", "base",
    "solana", "tezos", "q", "near", "aurora", "fantom", "metis", "waves", "iotex",
    "ethereumclassic", "thundercore", "era", "loopring", "osmosis", "kujira", "cosmoshub",
]

# which chain api implementation serves a chain, chains not listed are evm
chain_families = {
    "solana": "solana",
    "tezos": "tezos",
    "near": "near",
    "osmosis": "cosmos",
    "kujira": "cosmos",
    "cosmoshub": "cosmos",
    "waves": "http",
    "loopring": "http",
}

# public rpcs, overwritten by <CHAIN>_RPC env variables
default_rpcs = {
    "ethereum": "https://eth.llamarpc.com",
    "polygon": "https://polygon-rpc.com",
    "avalanche": "https://api.avax.network/ext/bc/C/rpc",
    "bsc": "https://bsc-dataseed.binance.org",
    "optimism": "https://mainnet.optimism.io",
    "celo": "https://forno.celo.org",
    "arbitrum": "https://arb1.arbitrum.io/rpc",
    "base": "https://mainnet.base.org",
    "q": "https://rpc.q.org",
    "aurora": "https://mainnet.aurora.dev",
    "fantom": "https://rpc.ftm.tools",
    "metis": "https://andromeda.metis.io/?owner=1088",
    "iotex": "https://babel-api.mainnet.iotex.io",
    "ethereumclassic": "https://etc.rivet.link",
    "thundercore": "https://mainnet-rpc.thundercore.com",
    "era": "https://mainnet.era.zksync.io",
}

# chains with the SupplyReader batch contract deployed (see misc/adapter_SupplyReader.py)
supply_reader_chains = ["ethereum", "arbitrum", "base", "optimism"]
