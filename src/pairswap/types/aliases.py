from eth_typing import ChecksumAddress

type Holder = ChecksumAddress
type Token = ChecksumAddress
