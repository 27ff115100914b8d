"""NFT viewer pipeline: fetch owned NFTs, normalize them, resolve their images."""

__all__: list[str] = []
