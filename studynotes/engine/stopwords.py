"""
Common English function words ignored by keyword extraction
"""

STOPWORDS = frozenset("""
a all an any are be do he i is it me my no we us the and or but if then else so nor yet for of to in on at by as from with without within into onto
about above across after again against along among around because been before being below beneath beside
besides between beyond both can cannot could did does doing done down during each either neither few
further had has have having her here hers herself him himself his how however into its itself just
less least many more most much must myself not now off once only other others ought our ours ourselves
out over own same shall she should since some such than that the their theirs them themselves there
therefore these they this those though through thus too toward towards under unless until upon very
was were what whatever when whenever where whereas wherever whether which while who whoever whom whose
why will with would you your yours yourself yourselves also another anyone anything every everyone
everything might something someone still
""".split())
